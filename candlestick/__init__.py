"""candlestick - view trading charts from your terminal."""

from candlestick.chart import render_chart
from candlestick.models import Candle, ChartOptions

__version__ = "1.0.0"

__all__ = ["Candle", "ChartOptions", "render_chart", "__version__"]
