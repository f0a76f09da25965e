"""Candle (OHLCV) data model."""

from typing import Sequence

from pydantic import BaseModel, Field


class Candle(BaseModel):
    """Represents a single OHLCV candle.

    ``volume_from``/``volume_to`` also accept the price API's
    ``volumefrom``/``volumeto`` keys so raw payloads validate directly.
    """

    time: int = Field(..., description="Candle open time (Unix seconds)")
    open: float = Field(..., description="Opening price")
    high: float = Field(..., description="High price")
    low: float = Field(..., description="Low price")
    close: float = Field(..., description="Closing price")
    volume_from: float = Field(0.0, alias="volumefrom", description="Volume in base currency")
    volume_to: float = Field(0.0, alias="volumeto", description="Volume in quote currency")

    model_config = {"frozen": True, "populate_by_name": True, "allow_inf_nan": False}

    @property
    def is_bullish(self) -> bool:
        """Equal open and close counts as bullish."""
        return self.close >= self.open

    @property
    def is_malformed(self) -> bool:
        return self.high < max(self.open, self.close) or self.low > min(self.open, self.close)

    def clipped(self) -> "Candle":
        """Return a copy whose high/low enclose the open and close."""
        if not self.is_malformed:
            return self
        return self.model_copy(update={
            "high": max(self.high, self.open, self.close),
            "low": min(self.low, self.open, self.close),
        })


def clip_candles(candles: Sequence[Candle]) -> tuple[list[Candle], int]:
    """Clip every malformed candle.

    Upstream data is not guaranteed to satisfy ``low <= open, close <= high``.
    Such candles are widened rather than rejected.

    Returns:
        Tuple of (clipped candles, number of candles that needed clipping).
    """
    result = []
    clipped = 0
    for candle in candles:
        if candle.is_malformed:
            clipped += 1
            candle = candle.clipped()
        result.append(candle)
    return result, clipped
