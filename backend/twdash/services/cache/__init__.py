"""
Cache module for the dashboard backend.

Provides caller-owned in-memory caches; nothing here is a process-wide
singleton.
"""

from twdash.services.cache.ttl_cache import TTLCache
from twdash.services.cache.index_weights import (
    FALLBACK_WEIGHTS,
    IndexWeightCache,
    estimate_weight_from_market_cap,
)

__all__ = [
    "TTLCache",
    "IndexWeightCache",
    "FALLBACK_WEIGHTS",
    "estimate_weight_from_market_cap",
]
