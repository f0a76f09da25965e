"""Least-squares trend line over close prices."""

import logging
from typing import Sequence

from candlestick.errors import InvalidInputError
from candlestick.models import Candle, TrendDirection

logger = logging.getLogger(__name__)

# Below this the regression denominator is treated as zero.
_EPSILON = 1e-12


def calculate_trend_line(candles: Sequence[Candle]) -> list[float]:
    """Fit close price against candle index with ordinary least squares.

    Args:
        candles: Candle series, oldest first.

    Returns:
        One fitted value per candle. A single candle (or any series whose
        denominator vanishes) yields a flat line at the mean close.

    Raises:
        InvalidInputError: If the series is empty.
    """
    n = len(candles)
    if n == 0:
        raise InvalidInputError("Cannot fit a trend line to an empty series")

    closes = [c.close for c in candles]
    sum_x = n * (n - 1) / 2
    sum_y = sum(closes)
    sum_xy = sum(i * close for i, close in enumerate(closes))
    sum_xx = (n - 1) * n * (2 * n - 1) / 6

    denominator = n * sum_xx - sum_x * sum_x
    if n == 1:
        return [closes[0]]
    if abs(denominator) < _EPSILON:
        logger.debug("Degenerate trend denominator for %d candles, using flat line", n)
        return [sum_y / n] * n

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    return [slope * i + intercept for i in range(n)]


def trend_direction(trend_line: Sequence[float]) -> TrendDirection:
    """Up only when the line ends strictly above where it starts."""
    if not trend_line:
        raise InvalidInputError("Trend line is empty")
    if trend_line[-1] > trend_line[0]:
        return TrendDirection.UP
    return TrendDirection.DOWN
