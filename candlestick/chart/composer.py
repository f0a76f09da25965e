"""Chart composition.

Runs the trend, grid and stats steps and assembles their output into one
printable string.
"""

import io
import math
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from pydantic import ValidationError
from rich.console import Console, RenderableType
from rich.text import Text

from candlestick.chart.grid import Grid, render_grid
from candlestick.chart.legend import render_stats
from candlestick.chart.stats import calculate_stats
from candlestick.chart.theme import DEFAULT_THEME, Theme
from candlestick.chart.trend import calculate_trend_line
from candlestick.errors import InvalidInputError
from candlestick.models import Candle, ChartOptions

# The stats tables need roughly this many columns to render unwrapped
STATS_MIN_WIDTH = 100


def load_candles(data: Any) -> list[Candle]:
    """Validate raw input into a list of candles.

    Accepts a sequence of ``Candle`` models or of mappings shaped like the
    price API's records.

    Raises:
        InvalidInputError: If ``data`` is not a non-empty sequence of
            well-formed candles.
    """
    if data is None:
        raise InvalidInputError("No candle data supplied")
    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence):
        raise InvalidInputError(f"Candle data must be a sequence, got {type(data).__name__}")
    if len(data) == 0:
        raise InvalidInputError("Candle series is empty")

    candles = []
    for index, item in enumerate(data):
        if isinstance(item, Candle):
            candle = item
        elif isinstance(item, Mapping):
            try:
                candle = Candle.model_validate(item)
            except ValidationError as e:
                raise InvalidInputError(f"Candle {index} is malformed: {e}") from e
        else:
            raise InvalidInputError(
                f"Candle {index} must be a Candle or mapping, got {type(item).__name__}"
            )

        # Candles built with model_construct skip validation
        values = (candle.open, candle.high, candle.low, candle.close,
                  candle.volume_from, candle.volume_to)
        if not all(math.isfinite(v) for v in values):
            raise InvalidInputError(f"Candle {index} has a non-finite price or volume")
        candles.append(candle)

    return candles


def grid_to_text(grid: Grid) -> Text:
    """Convert a grid to rich text, merging runs of equally styled cells."""
    text = Text(no_wrap=True, overflow="crop")
    for row_index, cells in enumerate(grid.rows()):
        if row_index:
            text.append("\n")
        run = ""
        run_style: Optional[str] = None
        for char, style in cells:
            if style != run_style and run:
                text.append(run, style=run_style)
                run = ""
            run_style = style
            run += char
        if run:
            text.append(run, style=run_style)
    return text


def title_text(pair_label: str, width: int, theme: Theme = DEFAULT_THEME) -> Text:
    """Centered chart title."""
    title = f"{pair_label} Price Chart"
    padding = " " * max(0, (width - len(title)) // 2)
    text = Text(padding, no_wrap=True, overflow="crop")
    text.append(title, style=theme.title_style)
    return text


def _make_console(width: int, theme: Theme) -> Console:
    return Console(
        file=io.StringIO(),
        width=width,
        color_system="standard" if theme.color else None,
        force_terminal=theme.color,
        force_jupyter=False,
        no_color=not theme.color,
        highlight=False,
        emoji=False,
        markup=False,
        legacy_windows=False,
    )


def render_chart(
    data: Any,
    options: Optional[ChartOptions] = None,
    theme: Theme = DEFAULT_THEME,
) -> str:
    """Render a candle series as a chart with optional title and stats.

    Args:
        data: Candle series, oldest first, as ``Candle`` models or raw
            API mappings.
        options: Chart options; defaults to a 120x30 chart with axes and
            legend.
        theme: Glyphs and styles. ``PLAIN_THEME`` produces text without
            escape codes.

    Returns:
        The chart text. Sections are separated by one blank line and the
        text ends with a single newline.

    Raises:
        InvalidInputError: If the input is not a non-empty sequence of
            well-formed candles. Nothing is rendered in that case.
    """
    candles = load_candles(data)
    options = options or ChartOptions()

    trend_line = calculate_trend_line(candles)
    grid, _ = render_grid(candles, trend_line, options, theme)

    sections: list[RenderableType] = []
    if options.pair_label and options.show_title:
        sections.append(title_text(options.pair_label, options.width, theme))
    sections.append(grid_to_text(grid))
    if not options.disable_legend:
        stats = calculate_stats(candles, trend_line, options.pair_label)
        sections.append(render_stats(stats, theme))

    console = _make_console(max(options.width, STATS_MIN_WIDTH), theme)
    for index, section in enumerate(sections):
        if index:
            console.print()
        console.print(section)

    return console.file.getvalue()
