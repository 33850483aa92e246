"""
Dashboard Schema Contracts

This module defines the JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from twdash.schemas.market import (
    CamelModel,
    OHLCBar,
    MarketContext,
)
from twdash.schemas.indicators import (
    IndicatorRequest,
    IndicatorResponse,
    IndicatorBundle,
    MACDData,
    MovingAverages,
    BollingerBandsData,
    StochasticData,
    MACDTrend,
    MATrend,
    BandPosition,
    StochasticStatus,
    TechnicalSignal,
)
from twdash.schemas.assessment import (
    Assessment,
    AssessmentAction,
    AssessmentRequest,
    AssessmentResponse,
)

__all__ = [
    # Market
    "CamelModel",
    "OHLCBar",
    "MarketContext",
    # Indicators
    "IndicatorRequest",
    "IndicatorResponse",
    "IndicatorBundle",
    "MACDData",
    "MovingAverages",
    "BollingerBandsData",
    "StochasticData",
    "MACDTrend",
    "MATrend",
    "BandPosition",
    "StochasticStatus",
    "TechnicalSignal",
    # Assessment
    "Assessment",
    "AssessmentAction",
    "AssessmentRequest",
    "AssessmentResponse",
]
