"""
CONTRACT 2: Indicator Engine

Input: list[OHLCBar]
Output: IndicatorBundle

Field names serialize in camelCase (changePercent, movingAverages, ...)
because that is how the dashboard reads them. Values are full precision;
rounding is left to the presentation layer.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import Field

from twdash.schemas.market import CamelModel, OHLCBar


# =============================================================================
# ENUMS
# =============================================================================


class MACDTrend(str, Enum):
    BULLISH = "Bullish"
    BEARISH = "Bearish"


class MATrend(str, Enum):
    UPTREND = "Uptrend"
    DOWNTREND = "Downtrend"
    NEUTRAL = "Neutral"


class BandPosition(str, Enum):
    ABOVE_UPPER = "Above Upper"
    BELOW_LOWER = "Below Lower"
    INSIDE = "Inside Bands"


class StochasticStatus(str, Enum):
    OVERBOUGHT = "Overbought"
    OVERSOLD = "Oversold"
    NEUTRAL = "Neutral"


class TechnicalSignal(str, Enum):
    """Headline signal shown in the technical analysis summary."""

    OVERBOUGHT = "OVERBOUGHT"
    OVERSOLD = "OVERSOLD"
    BULLISH_MOMENTUM = "BULLISH_MOMENTUM"
    BEARISH_MOMENTUM = "BEARISH_MOMENTUM"


# =============================================================================
# OUTPUT: Indicator Components
# =============================================================================


class MACDData(CamelModel):
    """MACD indicator values."""

    value: float
    signal: float
    histogram: float
    trend: MACDTrend


class MovingAverages(CamelModel):
    """Moving averages and the trend they imply."""

    sma20: float
    sma50: float
    ema12: float
    trend: MATrend


class BollingerBandsData(CamelModel):
    """Bollinger Bands values."""

    upper: float
    middle: float
    lower: float
    position: BandPosition


class StochasticData(CamelModel):
    """Stochastic oscillator values."""

    k: float = Field(..., ge=0, le=100)
    d: float = Field(..., ge=0, le=100)
    status: StochasticStatus


class IndicatorBundle(CamelModel):
    """
    Complete indicator snapshot for one OHLC series.
    Returned by: compute_indicators
    Consumed by: dashboard cards, assessment generator
    """

    price: float
    change: float
    change_percent: float
    rsi: float = Field(..., ge=0, le=100)
    macd: MACDData
    moving_averages: MovingAverages
    bollinger_bands: BollingerBandsData
    stochastic: StochasticData
    atr: float = Field(..., ge=0)


# =============================================================================
# SERVICE CONTRACT
# =============================================================================


class IndicatorRequest(CamelModel):
    """
    Request for indicator calculation.
    Sent by: API / dashboard
    Received by: Indicator Service
    """

    symbol: str = Field(..., min_length=1, description="Stock id, e.g. '2330'")
    period: str = Field(default="6mo", description="History range the bars cover")
    interval: str = Field(default="1d", description="Sampling interval of the bars")
    bars: list[OHLCBar] = Field(default_factory=list)


class IndicatorResponse(CamelModel):
    """Indicator snapshot plus the recent bars for charting."""

    symbol: str
    timestamp: datetime
    indicators: Optional[IndicatorBundle] = None
    signal: Optional[TechnicalSignal] = None
    ohlc_data: list[OHLCBar] = Field(default_factory=list)
