"""
CONTRACT 1: Market Data Boundary

Input: raw quote rows from the market-data collaborator
Output: list[OHLCBar]

Bars handed to the indicator engine must already be validated and sorted
in strictly ascending time order. The engine does not sort or deduplicate.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names for the frontend."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# OHLC BAR
# =============================================================================


class OHLCBar(CamelModel):
    """Single candlestick for one sampling interval."""

    time: int = Field(..., ge=0, description="Unix epoch seconds")
    open: float = Field(..., gt=0, allow_inf_nan=False)
    high: float = Field(..., gt=0, allow_inf_nan=False)
    low: float = Field(..., gt=0, allow_inf_nan=False)
    close: float = Field(..., gt=0, allow_inf_nan=False)

    @model_validator(mode="after")
    def check_range(self) -> "OHLCBar":
        if self.high < self.low:
            raise ValueError(f"high ({self.high}) is below low ({self.low})")
        return self


# =============================================================================
# MARKET CONTEXT (for assessments)
# =============================================================================


class MarketContext(CamelModel):
    """
    Broad-market backdrop for a single-stock assessment.

    Changes are daily percent moves of the TAIEX and TX futures.
    """

    index_change: Optional[float] = Field(default=None, description="TAIEX % change")
    index_symbol: str = "^TWII"
    futures_change: Optional[float] = Field(default=None, description="TX futures % change")
    futures_symbol: str = "WTX&"
