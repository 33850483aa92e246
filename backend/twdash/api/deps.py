"""
API dependencies.

Services live on app.state (created in main.lifespan) so each app
instance owns its caches.
"""

from fastapi import Request

from twdash.services.cache.index_weights import IndexWeightCache
from twdash.services.indicators.service import IndicatorService


def get_indicator_service(request: Request) -> IndicatorService:
    return request.app.state.indicator_service


def get_index_weight_cache(request: Request) -> IndexWeightCache:
    return request.app.state.index_weights
