"""Exceptions raised by candlestick."""


class CandlestickError(Exception):
    """Base class for all candlestick errors."""


class InvalidInputError(CandlestickError, ValueError):
    """The candle series is empty or contains candles that cannot be read."""


class MarketDataError(CandlestickError):
    """The market data API returned an error or no usable data."""
