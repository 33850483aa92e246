"""
Indicator API Endpoints

Endpoints for technical indicator calculations. Bars are supplied by the
caller; nothing here fetches market data.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from twdash.api.deps import get_indicator_service
from twdash.schemas.assessment import AssessmentRequest, AssessmentResponse
from twdash.schemas.indicators import IndicatorRequest, IndicatorResponse
from twdash.services.assessment import generate_assessment, symbol_seed
from twdash.services.base import DataUnavailableError, ValidationError
from twdash.services.indicators.service import IndicatorService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/compute", response_model=IndicatorResponse)
async def compute(
    request: IndicatorRequest,
    service: IndicatorService = Depends(get_indicator_service),
):
    """
    Compute the indicator bundle for an OHLC series.

    Returns:
        - RSI, MACD, moving averages, Bollinger Bands, Stochastic, ATR
        - Headline technical signal
        - Last 100 bars for charting

    An empty series yields `indicators: null` rather than an error.
    """
    try:
        return await service.execute(request)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/assessment", response_model=AssessmentResponse)
async def assessment(
    request: AssessmentRequest,
    service: IndicatorService = Depends(get_indicator_service),
):
    """
    Template-based assessment for one stock.

    The seed is derived from the stock id, so the same id and bars always
    produce the same text.
    """
    symbol = request.symbol.strip()

    try:
        bundle = await service.require_bundle(
            IndicatorRequest(symbol=request.symbol, bars=request.bars)
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except DataUnavailableError as e:
        raise HTTPException(status_code=404, detail=e.message)

    seed = symbol_seed(symbol)
    result = generate_assessment(bundle, seed, request.market_context)
    logger.info(f"Assessment for {symbol}: {result.action.value} ({result.confidence:.0f}%)")

    return AssessmentResponse(
        symbol=symbol,
        timestamp=datetime.now(timezone.utc),
        seed=seed,
        assessment=result,
    )
