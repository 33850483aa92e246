"""
TW Dashboard Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from twdash.core.config import settings
from twdash.api.v1 import router as api_v1_router
from twdash.services.cache import IndexWeightCache, TTLCache
from twdash.services.indicators import IndicatorService

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    app.state.indicator_service = IndicatorService(
        cache=TTLCache(
            settings.indicator_cache_ttl_seconds,
            max_entries=settings.indicator_cache_max_entries,
        )
    )
    app.state.index_weights = IndexWeightCache(ttl_seconds=settings.index_weight_ttl_seconds)
    logger.info("Indicator service ready")

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Taiwan Stock Dashboard API

    ## Architecture
    - **Indicator Engine**: RSI, MACD, moving averages, Bollinger Bands,
      Stochastic and ATR from caller-supplied OHLC bars (pure Python/NumPy)
    - **Assessment**: Deterministic template commentary built on the indicators
    - **Market**: TWSE session status and TAIEX constituent weights
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - allow the Vite dev server
cors_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
# Add any additional origins from settings
if settings.allowed_origins:
    cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "TW Dashboard Backend API",
        "docs": "/docs",
        "health": "/health",
    }
