"""
Indicator Engine Service Implementation

Wraps the pure engine for the API layer and memoizes bundles per
(symbol, period, interval, bar contents) for a short TTL. The cache belongs to the
service instance, not to the engine.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from twdash.schemas.indicators import (
    IndicatorBundle,
    IndicatorRequest,
    IndicatorResponse,
)
from twdash.services.base import DataUnavailableError, ValidationError
from twdash.services.cache.ttl_cache import TTLCache
from twdash.services.indicators.engine import classify_signal, compute_indicators
from twdash.services.indicators.interface import IndicatorServiceInterface

logger = logging.getLogger(__name__)

CHART_BARS = 100


def _cache_key(request: IndicatorRequest) -> tuple:
    """Key covers every bar's prices, so a revised or intraday bar is never served stale."""
    return (
        request.symbol.strip().upper(),
        request.period,
        request.interval,
        tuple((bar.time, bar.open, bar.high, bar.low, bar.close) for bar in request.bars),
    )


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Calculates technical indicators for dashboard display.
    All calculations are deterministic and reproducible.
    """

    def __init__(self, cache: Optional[TTLCache[IndicatorBundle]] = None):
        self._cache = cache

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def execute(self, input_data: IndicatorRequest) -> IndicatorResponse:
        """Calculate indicators and package them with chart bars."""
        bundle = await self.calculate_bundle(input_data)

        if bundle is None:
            logger.info(f"No bars for {input_data.symbol}, returning empty indicators")

        return IndicatorResponse(
            symbol=input_data.symbol,
            timestamp=datetime.now(timezone.utc),
            indicators=bundle,
            signal=classify_signal(bundle) if bundle else None,
            ohlc_data=input_data.bars[-CHART_BARS:],
        )

    async def validate_input(self, input_data: IndicatorRequest) -> IndicatorRequest:
        if not input_data.symbol.strip():
            raise ValidationError(self.name, "Symbol must not be blank")
        return input_data

    async def calculate_bundle(self, input_data: IndicatorRequest) -> Optional[IndicatorBundle]:
        """Indicator bundle for the request, served from cache when fresh."""
        await self.validate_input(input_data)

        if not input_data.bars:
            return None

        key = _cache_key(input_data)
        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                logger.debug(f"Indicator cache hit for {key[0]} ({len(input_data.bars)} bars)")
                return cached

        bundle = compute_indicators(input_data.bars)
        logger.debug(
            f"{input_data.symbol}: RSI={bundle.rsi:.2f}, MACD={bundle.macd.trend.value}, "
            f"bars={len(input_data.bars)}"
        )

        if self._cache is not None:
            self._cache.set(key, bundle)

        return bundle

    async def require_bundle(self, input_data: IndicatorRequest) -> IndicatorBundle:
        """
        Indicator bundle for callers that cannot work without one.

        Raises:
            DataUnavailableError: If the request carries no bars
        """
        bundle = await self.calculate_bundle(input_data)
        if bundle is None:
            raise DataUnavailableError(
                self.name,
                f"No data available for {input_data.symbol.strip()}",
                {"symbol": input_data.symbol},
            )
        return bundle

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True
