"""Chart rendering engine."""

from candlestick.chart.composer import load_candles, render_chart
from candlestick.chart.grid import Grid, PriceScale, render_grid
from candlestick.chart.legend import render_stats
from candlestick.chart.stats import calculate_stats
from candlestick.chart.theme import DEFAULT_THEME, PLAIN_THEME, Theme
from candlestick.chart.trend import calculate_trend_line, trend_direction

__all__ = [
    "DEFAULT_THEME",
    "Grid",
    "PLAIN_THEME",
    "PriceScale",
    "Theme",
    "calculate_stats",
    "calculate_trend_line",
    "load_candles",
    "render_chart",
    "render_grid",
    "render_stats",
    "trend_direction",
]
