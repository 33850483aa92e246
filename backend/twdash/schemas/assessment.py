"""
CONTRACT 3: Assessment

Input: IndicatorBundle + seed (+ optional MarketContext)
Output: Assessment

Template-driven commentary for the stock detail view. It has no
numerical authority; every number it shows comes from the bundle or
is derived from the seed.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import Field

from twdash.schemas.market import CamelModel, MarketContext, OHLCBar
from twdash.schemas.indicators import (
    BandPosition,
    MACDTrend,
    MATrend,
    StochasticStatus,
)


class AssessmentAction(str, Enum):
    STRONG_BUY = "STRONG_BUY"
    HOLD = "HOLD"
    NEUTRAL = "NEUTRAL"


class SignalAlignment(CamelModel):
    bullish: int = Field(..., ge=0)
    bearish: int = Field(..., ge=0)


class AssessmentIndicators(CamelModel):
    """Indicator states the narrative was built from."""

    rsi: float
    macd: MACDTrend
    ma_trend: MATrend
    bb_position: BandPosition
    stochastic: StochasticStatus
    signal_alignment: SignalAlignment


class InstitutionalFlow(CamelModel):
    """Simulated institutional figures, formatted for display."""

    investors: str = Field(..., description="Net institutional flow, e.g. '+350M'")
    margin: str = Field(..., description="Margin balance, e.g. '1200M'")
    day_trade: str = Field(..., description="Day-trade ratio, e.g. '27.5%'")


class StrategyPlan(CamelModel):
    target_price: float = Field(..., gt=0)
    stop_loss: float = Field(..., gt=0)
    reasoning: str


class Strategies(CamelModel):
    aggressive: StrategyPlan
    conservative: StrategyPlan


class Assessment(CamelModel):
    """
    Complete assessment for one stock.
    Returned by: generate_assessment
    Consumed by: stock detail modal
    """

    action: AssessmentAction
    confidence: float = Field(..., ge=40, le=95)
    reason: str
    indicators: AssessmentIndicators
    institutional: InstitutionalFlow
    market_bias: int = Field(..., ge=-2, le=2)
    strategies: Strategies


class AssessmentRequest(CamelModel):
    symbol: str = Field(..., min_length=1)
    bars: list[OHLCBar] = Field(default_factory=list)
    market_context: Optional[MarketContext] = None


class AssessmentResponse(CamelModel):
    symbol: str
    timestamp: datetime
    seed: int
    assessment: Assessment
