"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from twdash.api.v1.endpoints import indicators, market

router = APIRouter()

# Include all endpoint routers
router.include_router(indicators.router, prefix="/indicators", tags=["Indicators"])
router.include_router(market.router, prefix="/market", tags=["Market"])
