"""
TAIEX constituent weights.

Weights change rarely, so a fetched table is kept for a day. When no loader
is configured, or the loader fails, the static fallback table is served
instead and nothing is cached.
"""

import logging
import time
from typing import Awaitable, Callable, Optional

from twdash.services.cache.ttl_cache import TTLCache

logger = logging.getLogger(__name__)

WEIGHT_CACHE_TTL_SECONDS = 24 * 60 * 60

WeightLoader = Callable[[], Awaitable[Optional[dict[str, float]]]]

# Percent of index, snapshot from January 2026. Update by hand.
FALLBACK_WEIGHTS: dict[str, float] = {
    # Semiconductors
    "2330": 31.5,
    "2454": 3.2,
    "2303": 1.8,
    "3711": 1.5,
    "3034": 2.3,
    "2408": 0.3,
    "6549": 0.4,
    # Electronic components
    "2317": 5.2,
    "2382": 2.1,
    "2376": 0.6,
    "2356": 0.8,
    "2344": 0.9,
    "2395": 0.3,
    "2436": 0.2,
    "2301": 0.5,
    # Financials
    "2882": 3.4,
    "2891": 1.2,
    "2880": 1.5,
    # Shipping
    "2603": 2.8,
    "2618": 1.3,
    "2615": 1.2,
    # Telecom
    "2412": 1.9,
    # Panels
    "2409": 0.9,
    # Other
    "1590": 1.6,
    "1101": 0.7,
    "2201": 0.4,
    "1216": 1.1,
    "2498": 0.2,
    "1609": 0.3,
    "2545": 0.1,
}

_CACHE_KEY = "weights"


def estimate_weight_from_market_cap(market_cap: float, total_market_cap: float) -> float:
    """Approximate index weight (%) as a share of total constituent market cap."""
    if not market_cap or not total_market_cap:
        return 0.0
    return (market_cap / total_market_cap) * 100


class IndexWeightCache:
    """
    Scoped cache for index weights.

    Owned by the application (see main.lifespan); the loader and clock are
    injected so callers control where data comes from and when it expires.
    """

    def __init__(
        self,
        loader: Optional[WeightLoader] = None,
        ttl_seconds: float = WEIGHT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._loader = loader
        self._cache: TTLCache[dict[str, float]] = TTLCache(ttl_seconds, clock=clock)

    async def get_weights(self) -> dict[str, float]:
        """Return cached weights, loading fresh ones when stale."""
        cached = self._cache.get(_CACHE_KEY)
        if cached is not None:
            logger.debug("Using cached index weights")
            return cached

        if self._loader is None:
            return dict(FALLBACK_WEIGHTS)

        try:
            weights = await self._loader()
        except Exception as e:
            logger.warning(f"Index weight loader failed: {e}. Using fallback weights.")
            return dict(FALLBACK_WEIGHTS)

        if not weights:
            logger.warning("Index weight loader returned no data. Using fallback weights.")
            return dict(FALLBACK_WEIGHTS)

        self._cache.set(_CACHE_KEY, weights)
        logger.info(f"Updated {len(weights)} index weights")
        return weights

    async def get_stock_weight(self, stock_id: str) -> float:
        """Weight (%) of one stock, 0 if it is not a listed constituent."""
        weights = await self.get_weights()
        return weights.get(str(stock_id).strip(), 0.0)

    async def refresh(self) -> dict[str, float]:
        """Discard cached weights and load again."""
        self._cache.invalidate()
        return await self.get_weights()

    @property
    def last_update_time(self) -> Optional[float]:
        return self._cache.stored_at(_CACHE_KEY)

    def is_stale(self) -> bool:
        return self._cache.is_stale(_CACHE_KEY)
