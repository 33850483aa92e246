"""
Indicator Engine

Turns a chronologically ordered OHLC series into an IndicatorBundle.
Pure and synchronous: no I/O, no logging, no state between calls.
"""

from typing import Optional, Sequence

import numpy as np

from twdash.schemas.market import OHLCBar
from twdash.schemas.indicators import (
    BollingerBandsData,
    IndicatorBundle,
    MACDData,
    MACDTrend,
    MovingAverages,
    StochasticData,
    TechnicalSignal,
)
from twdash.services.indicators.calculations import (
    RSI_OVERBOUGHT,
    RSI_OVERSOLD,
    atr,
    band_position,
    bollinger_bands,
    ema,
    macd,
    macd_trend,
    moving_average_trend,
    rsi,
    sma,
    stochastic,
    stochastic_status,
)


def _bars_to_arrays(series: Sequence[OHLCBar]) -> tuple:
    """Convert bar list to numpy arrays."""
    highs = np.array([bar.high for bar in series], dtype=float)
    lows = np.array([bar.low for bar in series], dtype=float)
    closes = np.array([bar.close for bar in series], dtype=float)
    return highs, lows, closes


def compute_indicators(series: Sequence[OHLCBar]) -> Optional[IndicatorBundle]:
    """
    Compute the full indicator bundle for an OHLC series.

    Args:
        series: Bars in strictly ascending time order. Ordering is the
            caller's responsibility and is not checked.

    Returns:
        The bundle, or None when the series is empty.
    """
    if not series:
        return None

    highs, lows, closes = _bars_to_arrays(series)

    current = float(closes[-1])
    previous = float(closes[-2]) if len(closes) > 1 else current
    change = current - previous
    change_percent = (change / previous) * 100 if previous != 0 else 0.0

    macd_line, signal_line, histogram = macd(closes)

    sma_20 = sma(closes, 20)
    sma_50 = sma(closes, 50)
    ema_12 = ema(closes, 12)

    upper, middle, lower = bollinger_bands(closes, 20, 2.0)

    k, d = stochastic(highs, lows, closes, 14, 3)

    return IndicatorBundle(
        price=current,
        change=change,
        change_percent=change_percent,
        rsi=rsi(closes, 14),
        macd=MACDData(
            value=macd_line,
            signal=signal_line,
            histogram=histogram,
            trend=macd_trend(histogram),
        ),
        moving_averages=MovingAverages(
            sma20=sma_20,
            sma50=sma_50,
            ema12=ema_12,
            trend=moving_average_trend(current, sma_20, sma_50),
        ),
        bollinger_bands=BollingerBandsData(
            upper=upper,
            middle=middle,
            lower=lower,
            position=band_position(current, upper, lower),
        ),
        stochastic=StochasticData(k=k, d=d, status=stochastic_status(k)),
        atr=atr(highs, lows, closes, 14),
    )


def classify_signal(bundle: IndicatorBundle) -> TechnicalSignal:
    """
    Headline signal for the summary panel.

    Priority list: RSI extremes first, then MACD direction.
    """
    if bundle.rsi > RSI_OVERBOUGHT:
        return TechnicalSignal.OVERBOUGHT
    if bundle.rsi < RSI_OVERSOLD:
        return TechnicalSignal.OVERSOLD
    if bundle.macd.trend == MACDTrend.BULLISH:
        return TechnicalSignal.BULLISH_MOMENTUM
    return TechnicalSignal.BEARISH_MOMENTUM
