"""
Indicator Engine Service

CONTRACT:
    Input:  IndicatorRequest (symbol + ascending OHLC bars)
    Output: IndicatorResponse (IndicatorBundle + headline signal)

RESPONSIBILITIES:
    - RSI, MACD, SMA/EMA, Bollinger Bands, Stochastic, ATR
    - Trend / overbought / band-position classification
    - Headline technical signal for the summary panel

PURE PYTHON - No network, no logging inside the engine.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from twdash.services.indicators.engine import classify_signal, compute_indicators
from twdash.services.indicators.interface import IndicatorServiceInterface
from twdash.services.indicators.service import IndicatorService

__all__ = [
    "compute_indicators",
    "classify_signal",
    "IndicatorServiceInterface",
    "IndicatorService",
]
