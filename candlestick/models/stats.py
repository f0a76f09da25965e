"""Summary statistics models."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


class TrendDirection(str, Enum):
    """Direction of the fitted trend line."""

    UP = "up"
    DOWN = "down"


class TradeSnapshot(BaseModel):
    """Illustrative trade figures for the latest candle.

    These are approximations scaled from the latest candle's quote volume
    with fixed multipliers. They are not read from a trade feed and must
    always be presented as approximate.
    """

    last: float = Field(..., description="Latest close price")
    side: Literal["buy", "sell"] = Field(..., description="Side implied by the trend")
    size: float = Field(..., description="1% of quote volume")
    bought: float = Field(..., description="10% of quote volume")
    sold: float = Field(..., description="5% of quote volume")
    buys: int = Field(..., description="0.1% of quote volume, floored")
    sells: int = Field(..., description="0.05% of quote volume, floored")

    model_config = {"frozen": True}


class Stats(BaseModel):
    """Read-only summary of a candle series."""

    pair: Optional[str] = Field(None, description="Display label")
    current: float = Field(..., description="Latest close")
    min: float = Field(..., description="Lowest low")
    max: float = Field(..., description="Highest high")
    avg: float = Field(..., description="Mean close")
    volume: float = Field(..., description="Latest quote volume")
    pct_from_avg: float = Field(..., description="Current price vs average, in percent")
    changes: dict[str, float] = Field(..., description="Percent change per lookback window")
    trend_direction: TrendDirection
    trades: TradeSnapshot
    clipped: int = Field(0, ge=0, description="Candles whose high/low were clipped")

    model_config = {"frozen": True}
