"""
Assessment Narrative Generator

Pure function of (IndicatorBundle, seed, market context). It formats the
indicator states into a recommendation with template text and never feeds
anything back into the indicator engine.
"""

import math
from typing import Optional

from twdash.schemas.assessment import (
    Assessment,
    AssessmentAction,
    AssessmentIndicators,
    InstitutionalFlow,
    SignalAlignment,
    Strategies,
    StrategyPlan,
)
from twdash.schemas.indicators import (
    BandPosition,
    IndicatorBundle,
    MACDTrend,
    MATrend,
    StochasticStatus,
)
from twdash.schemas.market import MarketContext
from twdash.services.indicators.calculations import RSI_OVERBOUGHT, RSI_OVERSOLD

MARKET_MOVE_THRESHOLD = 0.6
MAX_MARKET_BIAS = 2

# (target multiplier, stop multiplier) per action and style
STRATEGY_LEVELS = {
    AssessmentAction.STRONG_BUY: {"aggressive": (1.12, 0.97), "conservative": (1.06, 0.94)},
    AssessmentAction.HOLD: {"aggressive": (1.04, 0.96), "conservative": (1.03, 0.95)},
    AssessmentAction.NEUTRAL: {"aggressive": (1.02, 0.98), "conservative": (1.01, 0.97)},
}

STRATEGY_REASONING = {
    AssessmentAction.STRONG_BUY: {
        "aggressive": (
            "For active traders: target +12% with a 3% stop (about 1:4 risk-reward). "
            "Scale in with half the position now, 30% on a pullback to support and keep "
            "20% in reserve. Add above the previous high; exit on a close below the 5-day MA."
        ),
        "conservative": (
            "For steady investors: target +6% with a 6% stop. Enter in three tranches near "
            "support, 1-2% apart. Trim if volume keeps shrinking; hold to target on a "
            "breakout with expanding volume."
        ),
    },
    AssessmentAction.HOLD: {
        "aggressive": (
            "Consolidation: probe with a small position. Target +4%, stop -4%, using at "
            "most 30% of capital placed at support. Raise to 50% only on a breakout with "
            "volume; exit at once if support fails."
        ),
        "conservative": (
            "Mostly observe. Existing holders can keep the position without adding; "
            "target +3%, stop -5%. After three sessions of shrinking volume and flat "
            "price, cut half and keep the core position."
        ),
    },
    AssessmentAction.NEUTRAL: {
        "aggressive": (
            "No clear trend; staying out is preferred. Any entry should use at most 20% "
            "of capital with a +2% target and -2% stop, exiting on whichever hits first."
        ),
        "conservative": (
            "Stay in cash. Direction is unclear and the downside outweighs the upside; "
            "wait for a confirmed trend or look at stocks with better setups."
        ),
    },
}


def symbol_seed(symbol: str) -> int:
    """Deterministic signed 32-bit string hash of a stock id."""
    value = 0
    for char in symbol:
        value = ((value << 5) - value + ord(char)) & 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _seed_mod(seed: int, divisor: int) -> float:
    """Remainder that keeps the sign of the seed."""
    return math.fmod(seed, divisor)


def market_bias(context: Optional[MarketContext]) -> int:
    """+1/-1 per market gauge moving more than 0.6%, clamped to ±2."""
    if context is None:
        return 0

    bias = 0
    for change in (context.index_change, context.futures_change):
        if change is None:
            continue
        if change > MARKET_MOVE_THRESHOLD:
            bias += 1
        elif change < -MARKET_MOVE_THRESHOLD:
            bias -= 1

    return max(-MAX_MARKET_BIAS, min(MAX_MARKET_BIAS, bias))


def _rsi_insight(rsi: float) -> str:
    if rsi > 75:
        return "extreme overbought conditions"
    if rsi > RSI_OVERBOUGHT:
        return "overbought territory"
    if rsi < 25:
        return "extreme oversold conditions offering strong reversal potential"
    if rsi < RSI_OVERSOLD:
        return "oversold levels with reversal potential"
    if rsi > 50:
        return "bullish momentum"
    return "neutral momentum"


def _ma_insight(trend: MATrend) -> str:
    if trend == MATrend.UPTREND:
        return "Strong uptrend structure intact"
    if trend == MATrend.DOWNTREND:
        return "Active downtrend with price below key averages"
    return "Consolidation phase without clear direction"


def _band_insight(position: BandPosition) -> str:
    if position == BandPosition.ABOVE_UPPER:
        return "testing upper Bollinger Band resistance"
    if position == BandPosition.BELOW_LOWER:
        return "touching lower Bollinger Band support"
    return "trading within normal volatility bands"


def _narrative(
    action: AssessmentAction,
    bundle: IndicatorBundle,
    inst_flow: float,
    day_trade_rate: float,
) -> str:
    rsi = bundle.rsi
    macd = bundle.macd.trend.value
    ma = _ma_insight(bundle.moving_averages.trend)
    band = _band_insight(bundle.bollinger_bands.position)

    if action == AssessmentAction.STRONG_BUY:
        return (
            f"Technical indicators show strong buy signals: RSI at {rsi:.1f} signals "
            f"{_rsi_insight(rsi)}. {ma} with {macd} MACD confirmation. Current price is "
            f"{band}. Institutional accumulation ({inst_flow:.0f}M net inflow) supports a "
            f"breakout. Risk-reward favors a 5-7 day swing trade."
        )
    if action == AssessmentAction.HOLD:
        return (
            f"Technicals suggest holding: RSI at {rsi:.1f} indicates {_rsi_insight(rsi)}. "
            f"{ma}. Price is {band}. Day-trading intensity at {day_trade_rate:.1f}% adds "
            f"noise, but the structure is intact. Watch for volume expansion before adding."
        )
    return (
        f"Caution: unclear technicals suggest observation. RSI at {rsi:.1f} shows "
        f"{_rsi_insight(rsi)}. {ma}. Price is {band}. Day-trading at {day_trade_rate:.1f}% "
        f"points to noise over trend. Wait for RSI extremes with MACD alignment, or a "
        f"moving-average breakout on volume."
    )


def _market_note(context: Optional[MarketContext]) -> str:
    if context is None:
        return ""

    parts = []
    if context.index_change is not None:
        parts.append(f"TAIEX {context.index_change:.2f}% ({context.index_symbol})")
    if context.futures_change is not None:
        parts.append(f"TX futures {context.futures_change:.2f}% ({context.futures_symbol})")

    if not parts:
        return ""
    return f"Market context: {'; '.join(parts)}."


def _choose_action(
    bundle: IndicatorBundle, bullish: int, bearish: int, change: float
) -> AssessmentAction:
    rsi = bundle.rsi
    macd_bullish = bundle.macd.trend == MACDTrend.BULLISH
    ma_trend = bundle.moving_averages.trend

    if (bullish >= 3 and change > 0.5) or (rsi < 25 and macd_bullish and change > 0):
        return AssessmentAction.STRONG_BUY
    if (bullish >= 2 and bearish >= 1) or (
        ma_trend == MATrend.NEUTRAL and RSI_OVERSOLD <= rsi <= RSI_OVERBOUGHT
    ):
        return AssessmentAction.HOLD
    return AssessmentAction.NEUTRAL


def _strategies(action: AssessmentAction, price: float) -> Strategies:
    plans = {}
    for style in ("aggressive", "conservative"):
        target, stop = STRATEGY_LEVELS[action][style]
        plans[style] = StrategyPlan(
            target_price=price * target,
            stop_loss=price * stop,
            reasoning=STRATEGY_REASONING[action][style],
        )
    return Strategies(**plans)


def generate_assessment(
    bundle: IndicatorBundle,
    seed: int,
    market_context: Optional[MarketContext] = None,
) -> Assessment:
    """
    Build the assessment for one stock.

    Args:
        bundle: Indicator bundle from compute_indicators.
        seed: Per-stock seed, normally symbol_seed(stock_id).
        market_context: Optional TAIEX / futures moves.

    Returns:
        Assessment; identical inputs always give identical output.
    """
    rsi = bundle.rsi
    change = bundle.change_percent
    is_up = change > 0
    macd_trend = bundle.macd.trend
    ma_trend = bundle.moving_averages.trend
    stoch = bundle.stochastic.status

    aligned = sum(
        [
            rsi > RSI_OVERBOUGHT or rsi < RSI_OVERSOLD,
            (macd_trend == MACDTrend.BULLISH) == is_up,
            (ma_trend == MATrend.UPTREND and is_up)
            or (ma_trend == MATrend.DOWNTREND and not is_up),
            (stoch == StochasticStatus.OVERSOLD and is_up)
            or (stoch == StochasticStatus.OVERBOUGHT and not is_up),
        ]
    )

    bias = market_bias(market_context)
    win_rate = min(95, 50 + aligned * 15 + abs(change) * 3)
    confidence = max(40, min(95, win_rate + bias * 5))

    rsi_flow = 200 if rsi < RSI_OVERSOLD else -200 if rsi > RSI_OVERBOUGHT else 0
    inst_flow = _seed_mod(seed, 800) + change * 150 + rsi_flow
    margin_balance = (
        abs(_seed_mod(seed, 15000))
        + change * 100
        + (-1000 if stoch == StochasticStatus.OVERBOUGHT else 1000)
    )
    day_trade_rate = max(
        10, min(40, 25 + abs(_seed_mod(seed, 35)) + abs(change) * 3 - aligned * 2)
    )

    bullish = sum(
        [
            rsi < RSI_OVERSOLD,
            50 < rsi < RSI_OVERBOUGHT,
            macd_trend == MACDTrend.BULLISH and ma_trend != MATrend.DOWNTREND,
            ma_trend == MATrend.UPTREND,
            stoch == StochasticStatus.OVERSOLD,
        ]
    ) + (1 if bias > 0 else 0)
    bearish = sum(
        [
            rsi > RSI_OVERBOUGHT,
            RSI_OVERSOLD < rsi < 50,
            macd_trend == MACDTrend.BEARISH and ma_trend != MATrend.UPTREND,
            ma_trend == MATrend.DOWNTREND,
            stoch == StochasticStatus.OVERBOUGHT,
        ]
    ) + (1 if bias < 0 else 0)

    action = _choose_action(bundle, bullish, bearish, change)
    reason = f"{_narrative(action, bundle, inst_flow, day_trade_rate)} {_market_note(market_context)}"

    return Assessment(
        action=action,
        confidence=confidence,
        reason=reason.strip(),
        indicators=AssessmentIndicators(
            rsi=rsi,
            macd=macd_trend,
            ma_trend=ma_trend,
            bb_position=bundle.bollinger_bands.position,
            stochastic=stoch,
            signal_alignment=SignalAlignment(bullish=bullish, bearish=bearish),
        ),
        institutional=InstitutionalFlow(
            investors=f"{'+' if inst_flow > 0 else ''}{inst_flow:.0f}M",
            margin=f"{margin_balance:.0f}M",
            day_trade=f"{day_trade_rate:.1f}%",
        ),
        market_bias=bias,
        strategies=_strategies(action, bundle.price),
    )
