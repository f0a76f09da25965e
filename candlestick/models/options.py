"""Chart display options."""

from typing import Optional

import pytz
from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_WIDTH = 120
DEFAULT_HEIGHT = 30


class ChartOptions(BaseModel):
    """Options controlling chart size, scale and layout.

    Aliases match the CLI configuration surface (``min``, ``max``,
    ``minRange``, ``disableLegend``, ``pairLabel``).
    """

    width: int = Field(DEFAULT_WIDTH, ge=12, description="Grid width in columns")
    height: int = Field(DEFAULT_HEIGHT, ge=4, description="Grid height in rows")
    min_price: Optional[float] = Field(None, alias="min", description="Lower price bound override")
    max_price: Optional[float] = Field(None, alias="max", description="Upper price bound override")
    min_range: Optional[float] = Field(None, gt=0, alias="minRange", description="Minimum vertical price span")
    disable_legend: bool = Field(False, alias="disableLegend", description="Omit the stats tables")
    pair_label: Optional[str] = Field(None, alias="pairLabel", description="Display label, e.g. BTC-USD")
    show_axes: bool = Field(True, description="Draw price and time axes")
    show_title: bool = Field(True, description="Draw the title line when a pair label is set")
    timezone: Optional[str] = Field(None, description="IANA zone for time labels (local when unset)")

    model_config = {"frozen": True, "populate_by_name": True, "allow_inf_nan": False}

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            try:
                pytz.timezone(value)
            except pytz.UnknownTimeZoneError:
                raise ValueError(f"Unknown timezone: {value}") from None
        return value

    @model_validator(mode="after")
    def _check_bounds(self) -> "ChartOptions":
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price >= self.max_price
        ):
            raise ValueError(
                f"min price ({self.min_price}) must be below max price ({self.max_price})"
            )
        return self
