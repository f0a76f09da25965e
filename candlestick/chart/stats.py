"""Summary statistics for a candle series."""

import math
from typing import Optional, Sequence

from candlestick.chart.trend import trend_direction
from candlestick.errors import InvalidInputError
from candlestick.models import Candle, Stats, TradeSnapshot, TrendDirection
from candlestick.models.candle import clip_candles

# Lookback windows, in samples. With minute candles the labels are literal.
CHANGE_WINDOWS = {
    "5m": 5,
    "30m": 30,
    "1h": 60,
    "12h": 720,
    "1d": 1440,
}

# Fractions of the latest quote volume used for the illustrative trade figures
TRADE_SIZE_RATIO = 0.01
TRADE_BOUGHT_RATIO = 0.1
TRADE_SOLD_RATIO = 0.05
TRADE_BUYS_RATIO = 0.001
TRADE_SELLS_RATIO = 0.0005


def percent_change(current: float, previous: float) -> float:
    """Percentage change from ``previous`` to ``current``; 0 when undefined."""
    if previous == 0:
        return 0.0
    return (current - previous) / previous * 100


def calculate_changes(candles: Sequence[Candle]) -> dict[str, float]:
    """Percent change of the latest close over each lookback window.

    A window longer than the series reports 0.
    """
    n = len(candles)
    current = candles[-1].close
    changes = {}
    for label, period in CHANGE_WINDOWS.items():
        if n < period:
            changes[label] = 0.0
        else:
            changes[label] = percent_change(current, candles[n - period].close)
    return changes


def estimate_trades(last: float, volume: float, direction: TrendDirection) -> TradeSnapshot:
    """Scale the latest quote volume into an illustrative trade snapshot.

    None of these numbers come from executed trades; they only give the
    trades table something proportional to show.
    """
    return TradeSnapshot(
        last=last,
        side="buy" if direction == TrendDirection.UP else "sell",
        size=volume * TRADE_SIZE_RATIO,
        bought=volume * TRADE_BOUGHT_RATIO,
        sold=volume * TRADE_SOLD_RATIO,
        buys=math.floor(volume * TRADE_BUYS_RATIO),
        sells=math.floor(volume * TRADE_SELLS_RATIO),
    )


def calculate_stats(
    candles: Sequence[Candle],
    trend_line: Sequence[float],
    pair: Optional[str] = None,
) -> Stats:
    """Derive summary statistics from a candle series and its trend line.

    Args:
        candles: Candle series, oldest first.
        trend_line: Fitted trend values, one per candle.
        pair: Optional display label carried into the result.

    Returns:
        Stats snapshot.

    Raises:
        InvalidInputError: If the series is empty.
    """
    if not candles:
        raise InvalidInputError("Cannot calculate stats for an empty series")

    candles, clipped = clip_candles(candles)
    latest = candles[-1]
    closes = [c.close for c in candles]

    current = latest.close
    avg = sum(closes) / len(closes)
    direction = trend_direction(trend_line)

    return Stats(
        pair=pair,
        current=current,
        min=min(c.low for c in candles),
        max=max(c.high for c in candles),
        avg=avg,
        volume=latest.volume_to,
        pct_from_avg=percent_change(current, avg),
        changes=calculate_changes(candles),
        trend_direction=direction,
        trades=estimate_trades(current, latest.volume_to, direction),
        clipped=clipped,
    )
