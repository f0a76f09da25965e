"""Data models for candlestick."""

from candlestick.models.candle import Candle
from candlestick.models.options import ChartOptions, DEFAULT_HEIGHT, DEFAULT_WIDTH
from candlestick.models.stats import Stats, TradeSnapshot, TrendDirection

__all__ = [
    "Candle",
    "ChartOptions",
    "DEFAULT_HEIGHT",
    "DEFAULT_WIDTH",
    "Stats",
    "TradeSnapshot",
    "TrendDirection",
]
