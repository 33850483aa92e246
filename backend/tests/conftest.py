"""Shared fixtures for the dashboard backend tests."""

import numpy as np
import pytest

from twdash.schemas.market import OHLCBar

DAY = 86_400
START = 1_767_225_600  # 2026-01-01 00:00 UTC


def build_bars(closes, spread=0.5):
    """Daily bars with high/low a fixed distance around each close."""
    return [
        OHLCBar(
            time=START + i * DAY,
            open=float(close),
            high=float(close) + spread,
            low=float(close) - spread,
            close=float(close),
        )
        for i, close in enumerate(closes)
    ]


@pytest.fixture
def make_bars():
    return build_bars


@pytest.fixture
def linear_bars():
    """30 daily bars, closes 100.00 -> 129.00 in 1.00 steps."""
    return build_bars([100.0 + i for i in range(30)])


@pytest.fixture
def flat_bars():
    """30 bars with every price at 100."""
    return build_bars([100.0] * 30, spread=0.0)


@pytest.fixture
def rally_bars():
    """40 flat bars followed by a 20-bar climb of 2.00 per bar."""
    return build_bars([100.0] * 40 + [100.0 + 2 * i for i in range(1, 21)])


@pytest.fixture
def selloff_bars():
    """40 flat bars followed by a 20-bar drop of 2.00 per bar."""
    return build_bars([100.0] * 40 + [100.0 - 2 * i for i in range(1, 21)])


@pytest.fixture
def random_walk():
    """Factory for reproducible random-walk bars of a given length."""

    def _make(n, seed=42):
        rng = np.random.default_rng(seed)
        closes = 100 * np.exp(np.cumsum(rng.normal(0, 0.02, n)))
        highs = closes * (1 + np.abs(rng.normal(0, 0.01, n)))
        lows = closes * (1 - np.abs(rng.normal(0, 0.01, n)))
        return [
            OHLCBar(
                time=START + i * DAY,
                open=float(closes[i - 1] if i else closes[0]),
                high=float(highs[i]),
                low=float(lows[i]),
                close=float(closes[i]),
            )
            for i in range(n)
        ]

    return _make
