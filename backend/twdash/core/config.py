"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "TW Dashboard Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS
    allowed_origins: list[str] = ["http://localhost:5173"]

    # Caches (seconds)
    indicator_cache_ttl_seconds: float = 60.0
    indicator_cache_max_entries: int = 500
    index_weight_ttl_seconds: float = 24 * 60 * 60

    # Market Hours (Asia/Taipei)
    market_timezone: str = "Asia/Taipei"
    market_open: str = "09:00"
    market_close: str = "13:30"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
