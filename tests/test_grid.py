"""Property-based tests for grid rendering.

**Feature: terminal-chart**
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from candlestick.chart import DEFAULT_THEME, PLAIN_THEME, calculate_trend_line, render_grid
from candlestick.chart.grid import (
    PRICE_AXIS_WIDTH,
    TIME_AXIS_HEIGHT,
    TIME_LABEL_PLACEHOLDER,
    Grid,
    PriceScale,
    format_axis_price,
    format_axis_time,
    price_bounds,
)
from candlestick.errors import InvalidInputError
from candlestick.models import Candle, ChartOptions

BODY = PLAIN_THEME.body_glyph
WICK = PLAIN_THEME.wick_glyph
TREND = PLAIN_THEME.trend_glyph


def candle(i: int, open: float, high: float, low: float, close: float) -> Candle:
    return Candle(time=3600 * i, open=open, high=high, low=low, close=close)


def flat_candles(price: float, count: int) -> list[Candle]:
    return [candle(i, price, price, price, price) for i in range(count)]


def draw(candles: list[Candle], theme=PLAIN_THEME, **options) -> Grid:
    grid, _ = render_grid(candles, calculate_trend_line(candles), ChartOptions(**options), theme)
    return grid


@st.composite
def candle_series(draw_, min_size: int = 1, max_size: int = 300):
    """Candles with arbitrary, possibly inconsistent, OHLC values."""
    price = st.floats(min_value=0.0001, max_value=100000.0, allow_nan=False)
    values = draw_(st.lists(
        st.tuples(price, price, price, price),
        min_size=min_size,
        max_size=max_size,
    ))
    return [candle(i, o, h, l, c) for i, (o, h, l, c) in enumerate(values)]


class TestGridDimensions:
    """
    **Feature: terminal-chart, Property 3: Grid Dimensions**

    *For any* series and size, the grid is exactly width x height and every
    serialized row is exactly width characters.
    """

    @given(
        candles=candle_series(),
        width=st.integers(min_value=12, max_value=200),
        height=st.integers(min_value=4, max_value=60),
        show_axes=st.booleans(),
    )
    @settings(max_examples=100, deadline=None)
    def test_grid_matches_options(self, candles, width, height, show_axes):
        grid = draw(candles, width=width, height=height, show_axes=show_axes, timezone="UTC")

        assert (grid.width, grid.height) == (width, height)
        lines = grid.plain_lines()
        assert len(lines) == height
        assert all(len(line) == width for line in lines)

    def test_default_dimensions(self):
        grid = draw(flat_candles(10.0, 5), timezone="UTC")

        assert (grid.width, grid.height) == (120, 30)


class TestRowMapping:
    """Price to row mapping at the edges of the window."""

    def test_bounds_map_to_first_and_last_row(self):
        scale = PriceScale(min_price=10, max_price=20, rows=10)

        assert scale.row_for(20) == 0
        assert scale.row_for(10) == 9

    def test_wick_spans_full_height(self):
        grid = draw(
            [candle(0, 12, 20, 10, 18)],
            width=20, height=10, min_price=10, max_price=20, show_axes=False,
        )

        assert grid.get(0, 0)[0] == WICK
        assert grid.get(9, 0)[0] == WICK
        # Body covers rows 2..7 (prices 18 and 12)
        assert [grid.get(row, 0)[0] for row in range(2, 8)] == [BODY] * 6

    def test_halves_round_up(self):
        scale = PriceScale(min_price=0, max_price=100, rows=10)

        assert scale.row_for(50) == 5

    def test_flat_scale_uses_middle_row(self):
        scale = PriceScale(min_price=100, max_price=100, rows=10)

        assert scale.row_for(100) == 4
        assert scale.row_for(5) == 4
        assert scale.price_for(7) == 100


class TestLayering:
    """
    **Feature: terminal-chart, Property 4: Candles Above Trend**

    The trend line shows only where no wick or body is drawn.
    """

    def test_trend_visible_between_candles(self):
        candles = [
            candle(0, 10, 10, 10, 10),
            candle(1, 90, 90, 90, 90),
            candle(2, 10, 10, 10, 10),
        ]
        grid = draw(candles, width=20, height=10, min_price=0, max_price=100, show_axes=False)

        # Trend is flat at 36.67, row 6; candles sit on rows 8 and 1
        assert grid.get(6, 0)[0] == TREND
        assert grid.get(6, 6)[0] == TREND
        assert grid.get(8, 0)[0] == BODY
        assert grid.get(1, 6)[0] == BODY

    def test_body_overwrites_trend(self):
        grid = draw(
            flat_candles(50.0, 2),
            width=20, height=10, min_price=0, max_price=100, show_axes=False,
        )

        assert grid.get(5, 0)[0] == BODY
        assert grid.get(5, 10)[0] == BODY

    def test_body_styles(self):
        candles = [
            candle(0, 10, 12, 8, 11),
            candle(1, 11, 12, 8, 9),
            candle(2, 10, 12, 8, 10),
        ]
        grid = draw(
            candles, DEFAULT_THEME,
            width=30, height=10, min_price=0, max_price=20, show_axes=False,
        )
        scale = PriceScale(min_price=0, max_price=20, rows=10)

        assert grid.get(scale.row_for(11), 0) == (BODY, DEFAULT_THEME.bullish_style)
        assert grid.get(scale.row_for(9), 10) == (BODY, DEFAULT_THEME.bearish_style)
        # Equal open and close is bullish
        assert grid.get(scale.row_for(10), 20) == (BODY, DEFAULT_THEME.bullish_style)


class TestDegenerateInput:
    """Flat ranges, malformed candles and out-of-window prices."""

    def test_flat_series_collapses_to_one_row(self):
        grid = draw(flat_candles(100.0, 20), width=40, height=10, show_axes=False)

        lines = grid.plain_lines()
        assert BODY in lines[4]
        for row, line in enumerate(lines):
            if row != 4:
                assert line.strip() == ""

    def test_malformed_candle_is_clipped(self):
        # Close above the reported high
        grid = draw(
            [candle(0, 10, 15, 0, 20)],
            width=20, height=11, min_price=0, max_price=100, show_axes=False,
        )

        assert grid.get(8, 0)[0] == BODY
        assert grid.get(9, 0)[0] == BODY
        assert grid.get(10, 0)[0] == WICK

    def test_prices_outside_window_are_dropped(self):
        grid = draw(
            [candle(0, 25, 30, 0, 5)],
            width=20, height=10, min_price=10, max_price=20, show_axes=False,
        )

        assert all(grid.get(row, 0)[0] == BODY for row in range(10))

    def test_empty_series_raises(self):
        with pytest.raises(InvalidInputError):
            render_grid([], [], ChartOptions())

    def test_mismatched_trend_raises(self):
        with pytest.raises(InvalidInputError):
            render_grid(flat_candles(1.0, 3), [1.0], ChartOptions())


class TestPriceBounds:
    """Effective price window."""

    def test_min_range_recenters(self):
        candles = [candle(i, 100, 101, 99, 100) for i in range(5)]

        bounds = price_bounds(candles, [100.0] * 5, ChartOptions(min_range=10))

        assert bounds == pytest.approx((95.0, 105.0))

    def test_min_range_smaller_than_span_is_ignored(self):
        candles = [candle(i, 100, 120, 80, 100) for i in range(5)]

        assert price_bounds(candles, [100.0] * 5, ChartOptions(min_range=10)) == (80, 120)

    def test_overrides_win(self):
        candles = flat_candles(15.0, 3)

        assert price_bounds(candles, [15.0] * 3, ChartOptions(min_price=10, max_price=20)) == (10, 20)

    def test_trend_widens_window(self):
        candles = [candle(i, 10, 11, 9, 10) for i in range(3)]

        assert price_bounds(candles, [5.0, 10.0, 15.0], ChartOptions()) == (5.0, 15.0)

    def test_single_override_past_data_swaps(self):
        candles = [candle(i, 100, 150, 90, 100) for i in range(3)]

        assert price_bounds(candles, [100.0] * 3, ChartOptions(min_price=500)) == (150, 500)


class TestAxes:
    """Price and time axes."""

    def test_axes_layout(self):
        candles = [candle(i, 104, 106, 102, 105) for i in range(8)]
        grid = draw(
            candles,
            width=40, height=12, min_price=100, max_price=110, timezone="UTC",
        )
        lines = grid.plain_lines()
        plot_height = 12 - TIME_AXIS_HEIGHT
        axis_col = PRICE_AXIS_WIDTH - 1

        for row in range(plot_height):
            assert lines[row][axis_col] == PLAIN_THEME.axis_y_glyph
        assert lines[0].startswith("  110.00")
        assert lines[plot_height][axis_col] == PLAIN_THEME.axis_corner_glyph
        assert lines[plot_height][PRICE_AXIS_WIDTH] == PLAIN_THEME.axis_tick_glyph
        assert "00:00" in lines[-1]
        assert "02:00" in lines[-1]

    def test_candles_stay_right_of_axis(self):
        grid = draw(flat_candles(5.0, 3), width=30, height=10, timezone="UTC")

        for line in grid.plain_lines()[:-TIME_AXIS_HEIGHT]:
            assert BODY not in line[:PRICE_AXIS_WIDTH]

    def test_format_axis_price(self):
        assert format_axis_price(1000) == "1.0k"
        assert format_axis_price(25300) == "25.3k"
        assert format_axis_price(999.99) == "999.99"
        assert format_axis_price(12.5) == "12.50"
        assert format_axis_price(0.25) == "0.2500"

    def test_format_axis_time(self):
        assert format_axis_time(0, "UTC") == "00:00"
        assert format_axis_time(13 * 3600 + 5 * 60, "UTC") == "13:05"
        assert format_axis_time(0, "Asia/Kolkata") == "05:30"

    @pytest.mark.parametrize("timestamp", [1700000000000, 10**18, -10**18])
    def test_unconvertible_time_gets_placeholder(self, timestamp):
        assert format_axis_time(timestamp, "UTC") == TIME_LABEL_PLACEHOLDER

    def test_millisecond_timestamps_keep_axes(self):
        candles = [
            Candle(time=1700000000000 + 60000 * i, open=10, high=12, low=9, close=11)
            for i in range(3)
        ]
        grid = draw(candles, width=40, height=10, timezone="UTC")

        assert TIME_LABEL_PLACEHOLDER in grid.plain_lines()[-1]
