"""
Market API Endpoints

Trading-session status and index constituent weights.
"""

from fastapi import APIRouter, Depends

from twdash.api.deps import get_index_weight_cache
from twdash.core.market_hours import get_market_status
from twdash.services.cache.index_weights import IndexWeightCache

router = APIRouter()


@router.get("/status")
async def market_status():
    """Current TWSE session (pre-market, open, after-market, closed)."""
    return get_market_status()


@router.get("/index-weights")
async def index_weights(cache: IndexWeightCache = Depends(get_index_weight_cache)):
    """All known TAIEX constituent weights (percent of index)."""
    weights = await cache.get_weights()
    return {
        "weights": weights,
        "count": len(weights),
        "last_update_time": cache.last_update_time,
        "is_stale": cache.is_stale(),
    }


@router.get("/index-weights/{stock_id}")
async def stock_weight(
    stock_id: str,
    cache: IndexWeightCache = Depends(get_index_weight_cache),
):
    """Index weight of a single stock, 0 if not a constituent."""
    return {
        "stock_id": stock_id,
        "weight": await cache.get_stock_weight(stock_id),
    }
