"""Tests for the template assessment generator."""

import pytest

from twdash.schemas.assessment import AssessmentAction
from twdash.schemas.indicators import (
    BandPosition,
    BollingerBandsData,
    IndicatorBundle,
    MACDData,
    MACDTrend,
    MATrend,
    MovingAverages,
    StochasticData,
    StochasticStatus,
)
from twdash.schemas.market import MarketContext
from twdash.services.assessment import generate_assessment, market_bias, symbol_seed
from twdash.services.indicators import compute_indicators


def make_bundle(
    rsi=50.0,
    macd=MACDTrend.BEARISH,
    ma=MATrend.NEUTRAL,
    stoch=StochasticStatus.NEUTRAL,
    change_percent=0.0,
    price=100.0,
):
    return IndicatorBundle(
        price=price,
        change=price * change_percent / 100,
        change_percent=change_percent,
        rsi=rsi,
        macd=MACDData(value=0.5, signal=0.4, histogram=0.1, trend=macd),
        moving_averages=MovingAverages(sma20=price, sma50=price, ema12=price, trend=ma),
        bollinger_bands=BollingerBandsData(
            upper=price * 1.05,
            middle=price,
            lower=price * 0.95,
            position=BandPosition.INSIDE,
        ),
        stochastic=StochasticData(k=50.0, d=50.0, status=stoch),
        atr=1.0,
    )


class TestSymbolSeed:
    def test_known_value(self):
        assert symbol_seed("2330") == 1540190

    def test_empty(self):
        assert symbol_seed("") == 0

    def test_wraps_to_signed_32_bit(self):
        seed = symbol_seed("TAIWAN SEMICONDUCTOR MANUFACTURING")
        assert -(2**31) <= seed < 2**31

    def test_stable(self):
        assert symbol_seed("2317") == symbol_seed("2317")
        assert symbol_seed("2317") != symbol_seed("2330")


class TestMarketBias:
    def test_no_context(self):
        assert market_bias(None) == 0

    @pytest.mark.parametrize(
        "index_change, futures_change, expected",
        [
            (1.0, 1.0, 2),
            (-1.0, -0.7, -2),
            (1.0, -1.0, 0),
            (0.6, -0.6, 0),
            (0.61, None, 1),
            (None, None, 0),
        ],
    )
    def test_thresholds(self, index_change, futures_change, expected):
        context = MarketContext(index_change=index_change, futures_change=futures_change)
        assert market_bias(context) == expected


class TestGenerateAssessment:
    def test_rally_holds_without_market_support(self, rally_bars):
        bundle = compute_indicators(rally_bars)
        result = generate_assessment(bundle, symbol_seed("2330"))

        assert result.action == AssessmentAction.HOLD
        assert result.indicators.signal_alignment.bullish == 2
        assert result.indicators.signal_alignment.bearish == 2
        assert result.market_bias == 0
        assert result.confidence == 95

    def test_rally_with_strong_market_is_strong_buy(self, rally_bars):
        bundle = compute_indicators(rally_bars)
        context = MarketContext(index_change=1.0, futures_change=1.0)

        result = generate_assessment(bundle, symbol_seed("2330"), context)

        assert result.action == AssessmentAction.STRONG_BUY
        assert result.market_bias == 2
        assert result.indicators.signal_alignment.bullish == 3
        assert result.confidence == 95
        assert "Market context: TAIEX 1.00% (^TWII); TX futures 1.00% (WTX&)." in result.reason

    def test_deep_oversold_reversal_is_strong_buy(self):
        bundle = make_bundle(rsi=22.0, macd=MACDTrend.BULLISH, change_percent=0.2)
        result = generate_assessment(bundle, 7)
        assert result.action == AssessmentAction.STRONG_BUY

    def test_weak_setup_is_neutral(self):
        bundle = make_bundle(
            rsi=40.0, macd=MACDTrend.BEARISH, ma=MATrend.DOWNTREND, change_percent=-1.0
        )
        result = generate_assessment(bundle, symbol_seed("2330"))

        assert result.action == AssessmentAction.NEUTRAL
        assert result.indicators.signal_alignment.bullish == 0
        assert result.indicators.signal_alignment.bearish == 3
        assert result.reason.startswith("Caution")

    def test_sideways_is_hold(self):
        result = generate_assessment(make_bundle(rsi=55.0), 1)
        assert result.action == AssessmentAction.HOLD

    def test_confidence_floor(self):
        bundle = make_bundle(
            rsi=50.0, macd=MACDTrend.BULLISH, ma=MATrend.NEUTRAL, change_percent=-0.1
        )
        context = MarketContext(index_change=-2.0, futures_change=-2.0)

        result = generate_assessment(bundle, 1, context)

        # Nothing aligned: 50 + 0.3 - 10
        assert result.confidence == pytest.approx(40.3)
        assert result.market_bias == -2

    def test_strategy_levels_follow_action(self):
        bundle = make_bundle(rsi=22.0, macd=MACDTrend.BULLISH, change_percent=0.2, price=200.0)
        strategies = generate_assessment(bundle, 7).strategies

        assert strategies.aggressive.target_price == pytest.approx(224.0)
        assert strategies.aggressive.stop_loss == pytest.approx(194.0)
        assert strategies.conservative.target_price == pytest.approx(212.0)
        assert strategies.conservative.stop_loss == pytest.approx(188.0)

    def test_institutional_figures_are_seeded(self):
        bundle = make_bundle(rsi=55.0)

        result = generate_assessment(bundle, 1540190)

        # fmod(1540190, 800) = 190
        assert result.institutional.investors == "+190M"
        assert result.institutional.day_trade.endswith("%")
        assert result.institutional.margin.endswith("M")

    def test_negative_seed_keeps_sign(self):
        result = generate_assessment(make_bundle(rsi=55.0), -1000)
        # fmod(-1000, 800) = -200
        assert result.institutional.investors == "-200M"

    def test_deterministic(self, random_walk):
        bundle = compute_indicators(random_walk(90))
        context = MarketContext(index_change=0.3, futures_change=-0.9)

        first = generate_assessment(bundle, symbol_seed("2454"), context)
        second = generate_assessment(bundle, symbol_seed("2454"), context)

        assert first == second

    def test_does_not_mutate_bundle(self, rally_bars):
        bundle = compute_indicators(rally_bars)
        before = bundle.model_dump()

        generate_assessment(bundle, 42, MarketContext(index_change=1.0))

        assert bundle.model_dump() == before

    def test_serializes_camel_case(self):
        data = generate_assessment(make_bundle(), 1).model_dump(by_alias=True, mode="json")

        assert "marketBias" in data
        assert "signalAlignment" in data["indicators"]
        assert "dayTrade" in data["institutional"]
        assert "targetPrice" in data["strategies"]["aggressive"]
