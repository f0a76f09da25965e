"""Property-based tests for the least-squares trend line.

**Feature: terminal-chart**
"""

import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from candlestick.chart import calculate_trend_line, trend_direction
from candlestick.errors import InvalidInputError
from candlestick.models import Candle, TrendDirection


def make_candles(closes: list[float]) -> list[Candle]:
    """Create candles one minute apart with the given closes."""
    return [
        Candle(time=60 * i, open=close, high=close + 1, low=close - 1, close=close)
        for i, close in enumerate(closes)
    ]


closes_strategy = st.lists(
    st.floats(min_value=0.01, max_value=100000.0, allow_nan=False, allow_infinity=False),
    min_size=1,
    max_size=300,
)


class TestTrendLineLength:
    """
    **Feature: terminal-chart, Property 1: Trend Line Length**

    *For any* non-empty series, the trend line has one value per candle
    and every value is finite.
    """

    @given(closes=closes_strategy)
    @settings(max_examples=100, deadline=None)
    def test_one_value_per_candle(self, closes: list[float]):
        trend = calculate_trend_line(make_candles(closes))

        assert len(trend) == len(closes)
        assert all(math.isfinite(value) for value in trend)

    @given(closes=st.lists(
        st.floats(min_value=1.0, max_value=1000.0, allow_nan=False),
        min_size=2,
        max_size=200,
    ))
    @settings(max_examples=100, deadline=None)
    def test_residuals_sum_to_zero(self, closes: list[float]):
        """An OLS fit with intercept has residuals that cancel out."""
        trend = calculate_trend_line(make_candles(closes))

        residual_sum = sum(c - t for c, t in zip(closes, trend))
        assert residual_sum == pytest.approx(0.0, abs=1e-6 * max(closes) * len(closes))


class TestTrendLineEdgeCases:
    """Single candles, flat series and empty input."""

    def test_single_candle_is_its_close(self):
        assert calculate_trend_line(make_candles([42.5])) == [42.5]

    def test_empty_series_raises(self):
        with pytest.raises(InvalidInputError):
            calculate_trend_line([])

    def test_flat_series_is_flat(self):
        trend = calculate_trend_line(make_candles([100.0] * 10))

        assert trend == pytest.approx([100.0] * 10)
        assert trend_direction(trend) == TrendDirection.DOWN

    def test_rising_closes_fit_exactly(self):
        trend = calculate_trend_line(make_candles([1, 2, 3, 4, 5]))

        assert trend == pytest.approx([1.0, 2.0, 3.0, 4.0, 5.0])
        assert trend[1] - trend[0] > 0
        assert trend_direction(trend) == TrendDirection.UP

    def test_falling_closes_trend_down(self):
        trend = calculate_trend_line(make_candles([5, 4, 3, 2, 1]))

        assert trend_direction(trend) == TrendDirection.DOWN

    def test_direction_of_empty_line_raises(self):
        with pytest.raises(InvalidInputError):
            trend_direction([])


class TestTrendDirection:
    """
    **Feature: terminal-chart, Property 2: Trend Direction**

    *For any* trend line, the direction is UP exactly when the last value
    is strictly greater than the first.
    """

    @given(values=st.lists(
        st.floats(min_value=-1e6, max_value=1e6, allow_nan=False),
        min_size=1,
        max_size=50,
    ))
    @settings(max_examples=100)
    def test_up_iff_last_above_first(self, values: list[float]):
        expected = TrendDirection.UP if values[-1] > values[0] else TrendDirection.DOWN

        assert trend_direction(values) == expected
