"""
Technical Indicator Calculations

Pure NumPy implementations of the dashboard's technical indicators.
Every function returns the latest value as a plain float and falls back
to a defined constant when the series is too short or degenerate, so the
result never contains NaN or infinity.
"""

import math

import numpy as np

from twdash.schemas.indicators import (
    BandPosition,
    MACDTrend,
    MATrend,
    StochasticStatus,
)


RSI_OVERBOUGHT = 70
RSI_OVERSOLD = 30
STOCHASTIC_OVERBOUGHT = 80
STOCHASTIC_OVERSOLD = 20

NEUTRAL_OSCILLATOR = 50.0


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: np.ndarray, period: int) -> float:
    """Simple Moving Average of the trailing window."""
    if len(data) < period:
        return float(data[-1])
    return float(np.mean(data[-period:]))


def ema_series(data: np.ndarray, period: int) -> np.ndarray:
    """
    Exponential Moving Average at every index.

    Seeded with the SMA of the first `period` values; indices before the
    seed are NaN.
    """
    result = np.full(len(data), np.nan)
    if len(data) < period:
        return result

    multiplier = 2 / (period + 1)
    result[period - 1] = np.mean(data[:period])

    for i in range(period, len(data)):
        # Same as data*k + prev*(1-k), but exact on flat input
        result[i] = result[i - 1] + multiplier * (data[i] - result[i - 1])

    return result


def ema(data: np.ndarray, period: int) -> float:
    """Exponential Moving Average, or the last value if too short to smooth."""
    if len(data) < period:
        return float(data[-1])
    return float(ema_series(data, period)[-1])


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: np.ndarray, period: int = 14) -> float:
    """
    Relative Strength Index over the last `period` price changes.

    Uses plain averages of gains and losses (no Wilder smoothing).
    """
    if len(closes) < period + 1:
        return NEUTRAL_OSCILLATOR

    deltas = np.diff(closes[-(period + 1):])

    avg_gain = float(np.sum(deltas[deltas > 0])) / period
    avg_loss = float(-np.sum(deltas[deltas < 0])) / period

    # All gains -> 100, flat -> neutral
    if avg_loss == 0:
        return 100.0 if avg_gain > 0 else NEUTRAL_OSCILLATOR

    rs = avg_gain / avg_loss
    value = 100 - (100 / (1 + rs))

    return min(100.0, max(0.0, value))


def macd(
    closes: np.ndarray,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[float, float, float]:
    """
    MACD (Moving Average Convergence Divergence).

    The signal line is an EMA over the MACD history starting at index
    `slow_period - 1`, the first index where the slow EMA is seeded.

    Returns: (macd_line, signal_line, histogram)
    """
    fast_ema = ema_series(closes, fast_period)
    slow_ema = ema_series(closes, slow_period)

    history = fast_ema[slow_period - 1 :] - slow_ema[slow_period - 1 :]

    if len(history) == 0:
        # No seeded slow EMA yet, nothing to smooth
        macd_line = ema(closes, fast_period) - ema(closes, slow_period)
        signal_line = macd_line
    else:
        macd_line = float(history[-1])
        signal_line = ema(history, signal_period)

    return macd_line, signal_line, macd_line - signal_line


def percent_k(close: float, highest: float, lowest: float) -> float:
    """Raw stochastic %K for one bar, clamped to [0, 100]."""
    if highest == lowest:
        return NEUTRAL_OSCILLATOR
    value = ((close - lowest) / (highest - lowest)) * 100
    return min(100.0, max(0.0, value))


def stochastic(
    highs: np.ndarray,
    lows: np.ndarray,
    closes: np.ndarray,
    k_period: int = 14,
    d_period: int = 3,
) -> tuple[float, float]:
    """
    Stochastic Oscillator.

    %D is the mean of the last `d_period` %K values (fewer when the %K
    history is shorter).

    Returns: (k, d)
    """
    if len(closes) < k_period:
        return NEUTRAL_OSCILLATOR, NEUTRAL_OSCILLATOR

    k_values = []
    for i in range(k_period - 1, len(closes)):
        highest_high = float(np.max(highs[i - k_period + 1 : i + 1]))
        lowest_low = float(np.min(lows[i - k_period + 1 : i + 1]))
        k_values.append(percent_k(float(closes[i]), highest_high, lowest_low))

    recent = k_values[-d_period:]
    return k_values[-1], sum(recent) / len(recent)


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def true_range(highs: np.ndarray, lows: np.ndarray, closes: np.ndarray) -> np.ndarray:
    """True Range per bar; the first bar uses its own close as previous close."""
    prev_closes = np.concatenate((closes[:1], closes[:-1]))
    return np.maximum.reduce(
        [
            highs - lows,
            np.abs(highs - prev_closes),
            np.abs(lows - prev_closes),
        ]
    )


def atr(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, period: int = 14
) -> float:
    """Average True Range with Wilder smoothing."""
    if len(closes) < period:
        return float(highs[-1] - lows[-1])

    tr = true_range(highs, lows, closes)

    value = float(np.mean(tr[:period]))
    for i in range(period, len(tr)):
        value = (value * (period - 1) + float(tr[i])) / period

    return value


def bollinger_bands(
    closes: np.ndarray, period: int = 20, std_dev: float = 2.0
) -> tuple[float, float, float]:
    """
    Bollinger Bands around the trailing SMA.

    Variance is the population variance of the trailing window, always
    divided by `period`.

    Returns: (upper, middle, lower)
    """
    middle = sma(closes, period)
    window = closes[-period:]

    if np.ptp(window) == 0:
        deviation = 0.0
    else:
        variance = float(np.sum((window - middle) ** 2)) / period
        deviation = math.sqrt(variance)

    return middle + std_dev * deviation, middle, middle - std_dev * deviation


# =============================================================================
# CLASSIFICATION
# =============================================================================


def macd_trend(histogram: float) -> MACDTrend:
    """Bullish only for a strictly positive histogram."""
    return MACDTrend.BULLISH if histogram > 0 else MACDTrend.BEARISH


def moving_average_trend(price: float, sma_short: float, sma_long: float) -> MATrend:
    if price > sma_short > sma_long:
        return MATrend.UPTREND
    if price < sma_short < sma_long:
        return MATrend.DOWNTREND
    return MATrend.NEUTRAL


def band_position(price: float, upper: float, lower: float) -> BandPosition:
    if price > upper:
        return BandPosition.ABOVE_UPPER
    if price < lower:
        return BandPosition.BELOW_LOWER
    return BandPosition.INSIDE


def stochastic_status(k: float) -> StochasticStatus:
    if k > STOCHASTIC_OVERBOUGHT:
        return StochasticStatus.OVERBOUGHT
    if k < STOCHASTIC_OVERSOLD:
        return StochasticStatus.OVERSOLD
    return StochasticStatus.NEUTRAL
