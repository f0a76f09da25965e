"""Candlestick grid rendering.

Maps a candle series and its trend line onto a fixed ``width x height``
character grid. The grid is a flat arena indexed ``row * width + col``;
anything drawn outside it is dropped.
"""

import logging
import math
from datetime import datetime
from typing import Iterator, Optional, Sequence

import pytz
from pydantic import BaseModel

from candlestick.chart.theme import DEFAULT_THEME, Theme
from candlestick.errors import InvalidInputError
from candlestick.models import Candle, ChartOptions
from candlestick.models.candle import clip_candles

logger = logging.getLogger(__name__)

# Margins reserved when axes are drawn
PRICE_AXIS_WIDTH = 10
TIME_AXIS_HEIGHT = 2

# Number of labels along each axis
AXIS_LABEL_COUNT = 4
TIME_LABEL_PLACEHOLDER = "--:--"

Cell = tuple[str, Optional[str]]


class Grid:
    """Fixed-size character grid with an optional style per cell."""

    def __init__(self, width: int, height: int, fill: str = " "):
        self.width = width
        self.height = height
        self._chars = [fill] * (width * height)
        self._styles: list[Optional[str]] = [None] * (width * height)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def set(self, row: int, col: int, char: str, style: Optional[str] = None) -> bool:
        """Write one cell. Returns False if the cell is outside the grid."""
        if not self.in_bounds(row, col):
            return False
        index = row * self.width + col
        self._chars[index] = char
        self._styles[index] = style
        return True

    def get(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) outside {self.width}x{self.height} grid")
        index = row * self.width + col
        return self._chars[index], self._styles[index]

    def write_text(self, row: int, col: int, text: str, style: Optional[str] = None) -> None:
        """Write a string left to right starting at ``col``, clipping at the edges."""
        for offset, char in enumerate(text):
            self.set(row, col + offset, char, style)

    def row_cells(self, row: int) -> list[Cell]:
        start = row * self.width
        end = start + self.width
        return list(zip(self._chars[start:end], self._styles[start:end]))

    def rows(self) -> Iterator[list[Cell]]:
        for row in range(self.height):
            yield self.row_cells(row)

    def plain_lines(self) -> list[str]:
        """Grid rows as unstyled strings, each exactly ``width`` characters."""
        return [
            "".join(self._chars[row * self.width:(row + 1) * self.width])
            for row in range(self.height)
        ]

    def __str__(self) -> str:
        return "\n".join(self.plain_lines())


class PriceScale(BaseModel):
    """Vertical mapping from price to plot row."""

    min_price: float
    max_price: float
    rows: int

    model_config = {"frozen": True}

    @property
    def span(self) -> float:
        return self.max_price - self.min_price

    @property
    def is_flat(self) -> bool:
        return self.span == 0

    def row_for(self, price: float) -> int:
        """Higher prices map to smaller rows. A flat scale maps to the middle row."""
        if self.is_flat:
            return (self.rows - 1) // 2
        scaled = (self.max_price - price) / self.span * (self.rows - 1)
        # Round half up so the result does not depend on banker's rounding
        return math.floor(scaled + 0.5)

    def price_for(self, row: int) -> float:
        if self.is_flat or self.rows < 2:
            return self.max_price
        return self.max_price - row * self.span / (self.rows - 1)


def price_bounds(
    candles: Sequence[Candle],
    trend_line: Sequence[float],
    options: ChartOptions,
) -> tuple[float, float]:
    """Effective (min, max) price window for the plot.

    Overrides from the options win; otherwise the window covers every high,
    low and trend value. A ``min_range`` wider than the window re-centers
    it around its midpoint.
    """
    if options.max_price is not None:
        max_price = options.max_price
    else:
        max_price = max(max(c.high for c in candles), max(trend_line))

    if options.min_price is not None:
        min_price = options.min_price
    else:
        min_price = min(min(c.low for c in candles), min(trend_line))

    # A single override can land on the wrong side of the data
    if min_price > max_price:
        min_price, max_price = max_price, min_price

    if options.min_range is not None and max_price - min_price < options.min_range:
        middle = (max_price + min_price) / 2
        min_price = middle - options.min_range / 2
        max_price = middle + options.min_range / 2

    return min_price, max_price


def format_axis_price(price: float) -> str:
    """Compact price label: ``12.3k``, ``0.1234`` or ``12.34``."""
    if price >= 1000:
        return f"{price / 1000:.1f}k"
    if price < 1:
        return f"{price:.4f}"
    return f"{price:.2f}"


def format_axis_time(timestamp: int, timezone: Optional[str] = None) -> str:
    """``HH:MM`` in the given IANA zone, or local time when unset.

    Timestamps the platform cannot convert (e.g. milliseconds passed as
    seconds) get the ``--:--`` placeholder.
    """
    tz = pytz.timezone(timezone) if timezone else None
    try:
        return datetime.fromtimestamp(timestamp, tz).strftime("%H:%M")
    except (OverflowError, OSError, ValueError):
        logger.debug("Timestamp %s out of range for time label", timestamp)
        return TIME_LABEL_PLACEHOLDER


def render_grid(
    candles: Sequence[Candle],
    trend_line: Sequence[float],
    options: Optional[ChartOptions] = None,
    theme: Theme = DEFAULT_THEME,
) -> tuple[Grid, PriceScale]:
    """Draw candles, trend line and axes into a new grid.

    Args:
        candles: Candle series, oldest first.
        trend_line: One fitted value per candle.
        options: Size, scale and layout options.
        theme: Glyphs and styles.

    Returns:
        Tuple of (grid, price scale used for the plot area).

    Raises:
        InvalidInputError: If the series is empty or the trend line length
            does not match it.
    """
    options = options or ChartOptions()
    if not candles:
        raise InvalidInputError("Cannot render an empty candle series")
    if len(trend_line) != len(candles):
        raise InvalidInputError(
            f"Trend line has {len(trend_line)} values for {len(candles)} candles"
        )

    candles, clipped = clip_candles(candles)
    if clipped:
        logger.debug("Clipped high/low of %d malformed candles", clipped)

    grid = Grid(options.width, options.height)

    left = PRICE_AXIS_WIDTH if options.show_axes else 0
    bottom = TIME_AXIS_HEIGHT if options.show_axes else 0
    plot_width = options.width - left
    plot_height = options.height - bottom

    min_price, max_price = price_bounds(candles, trend_line, options)
    scale = PriceScale(min_price=min_price, max_price=max_price, rows=plot_height)
    if scale.is_flat:
        logger.debug("Flat price range at %s, collapsing to middle row", max_price)

    n = len(candles)
    columns = [left + math.floor(i * plot_width / n) for i in range(n)]

    def plot(row: int, col: int, char: str, style: Optional[str]) -> None:
        # Keep price action inside the plot area so it never covers the axes
        if 0 <= row < plot_height and left <= col < options.width:
            grid.set(row, col, char, style)

    # Trend first so candles always draw over it
    for col, price in zip(columns, trend_line):
        plot(scale.row_for(price), col, theme.trend_glyph, theme.trend_style)

    for col, candle in zip(columns, candles):
        high_row = scale.row_for(candle.high)
        low_row = scale.row_for(candle.low)
        for row in range(high_row, low_row + 1):
            plot(row, col, theme.wick_glyph, theme.wick_style)

        open_row = scale.row_for(candle.open)
        close_row = scale.row_for(candle.close)
        body_style = theme.bullish_style if candle.is_bullish else theme.bearish_style
        for row in range(min(open_row, close_row), max(open_row, close_row) + 1):
            plot(row, col, theme.body_glyph, body_style)

    if options.show_axes:
        _draw_price_axis(grid, scale, left, theme)
        _draw_time_axis(grid, candles, columns, plot_height, left, options.timezone, theme)

    return grid, scale


def _draw_price_axis(grid: Grid, scale: PriceScale, left: int, theme: Theme) -> None:
    step = max(1, scale.rows // AXIS_LABEL_COUNT)
    for row in range(scale.rows):
        grid.set(row, left - 1, theme.axis_y_glyph, theme.axis_style)
        if row % step == 0:
            label = format_axis_price(scale.price_for(row))
            grid.write_text(row, left - len(label) - 2, label, theme.label_style)


def _draw_time_axis(
    grid: Grid,
    candles: Sequence[Candle],
    columns: Sequence[int],
    axis_row: int,
    left: int,
    timezone: Optional[str],
    theme: Theme,
) -> None:
    for col in range(left, grid.width):
        grid.set(axis_row, col, theme.axis_x_glyph, theme.axis_style)
    grid.set(axis_row, left - 1, theme.axis_corner_glyph, theme.axis_style)

    step = max(1, len(candles) // AXIS_LABEL_COUNT)
    for i in range(0, len(candles), step):
        col = columns[i]
        if col >= grid.width:
            continue
        grid.set(axis_row, col, theme.axis_tick_glyph, theme.axis_style)
        label = format_axis_time(candles[i].time, timezone)
        grid.write_text(axis_row + 1, col - len(label) // 2, label, theme.label_style)
