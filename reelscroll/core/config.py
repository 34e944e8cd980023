"""
Configuration Management
Loads and validates environment variables
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )
    BASE_URL: str = "http://localhost:8000"

    # Remote media search
    SEARCH_API_URL: str = "http://localhost:3001/api"
    SEARCH_API_KEY: Optional[str] = None
    SEARCH_TIMEOUT_SECONDS: float = 5.0
    SEARCH_RETRY_ATTEMPTS: int = 2

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_ENABLED: bool = True

    # Cache TTLs (seconds)
    CACHE_TTL_SEARCH: int = 900  # 15 minutes

    # Discovery
    ANCHOR_YEAR: int = 2025  # Newest year queried on page 1
    VIEWPORT_THRESHOLD: float = 0.1  # Sentinel fraction that must be visible
    VISIBILITY_POLL_INTERVAL_SECONDS: float = 0.25

    # Page lifecycle
    PAGE_IDLE_TIMEOUT_SECONDS: int = 1800  # 30 minutes
    PAGE_SWEEP_INTERVAL_SECONDS: int = 60
    MAX_OPEN_PAGES: int = 1000

    # Home feed
    HOME_FEATURED_TITLE: str = "Dune"

    # API Rate Limits (requests per second)
    SEARCH_RATE_LIMIT: int = 20  # requests per second, 0 = unlimited

    # Development
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    DISABLE_RATE_LIMITING: bool = False  # Set to True to disable rate limiting for local dev


settings = Settings()
