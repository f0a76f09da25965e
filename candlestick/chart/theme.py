"""Glyphs and styles used to draw charts.

A theme is passed explicitly into the grid and stats renderers. Styles are
rich style strings; ``None`` means unstyled.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Theme(BaseModel):
    """Chart glyphs and their styles."""

    body_glyph: str = Field("█", min_length=1, max_length=1)
    wick_glyph: str = Field("│", min_length=1, max_length=1)
    trend_glyph: str = Field("─", min_length=1, max_length=1)
    axis_y_glyph: str = Field("│", min_length=1, max_length=1)
    axis_x_glyph: str = Field("─", min_length=1, max_length=1)
    axis_corner_glyph: str = Field("└", min_length=1, max_length=1)
    axis_tick_glyph: str = Field("┴", min_length=1, max_length=1)

    bullish_style: Optional[str] = "bold green"
    bearish_style: Optional[str] = "bold red"
    wick_style: Optional[str] = "grey50"
    trend_style: Optional[str] = "bold yellow"
    axis_style: Optional[str] = "grey50"
    label_style: Optional[str] = "grey50"
    title_style: Optional[str] = "bold"
    up_style: Optional[str] = "green"
    down_style: Optional[str] = "red"
    table_header_style: Optional[str] = "grey50"
    table_border_style: Optional[str] = "grey50"

    color: bool = Field(True, description="Emit ANSI styling when rendering to text")

    model_config = {"frozen": True}


DEFAULT_THEME = Theme()

# Same glyphs, no styling. Used for headless output and in tests.
PLAIN_THEME = Theme(
    bullish_style=None,
    bearish_style=None,
    wick_style=None,
    trend_style=None,
    axis_style=None,
    label_style=None,
    title_style=None,
    up_style=None,
    down_style=None,
    table_header_style=None,
    table_border_style=None,
    color=False,
)
