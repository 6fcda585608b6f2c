"""
WorkloadHub Configuration Management

Uses Pydantic Settings for type-safe configuration from environment variables.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # =========================================================================
    # APPLICATION
    # =========================================================================
    APP_NAME: str = "WorkloadHub"
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "info"
    VERSION: str = "0.1.0"

    # =========================================================================
    # API SERVER
    # =========================================================================
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 4000
    CORS_ORIGINS: str = "http://localhost:3000"

    # =========================================================================
    # MONDAY.COM (Task + Group Source)
    # =========================================================================
    MONDAY_API_URL: str = "https://api.monday.com/v2"
    MONDAY_API_TOKEN: str = ""
    MONDAY_API_VERSION: str = "2024-01"
    MONDAY_BOARD_ID: str = "2038576678"
    MONDAY_TIMEOUT_SECONDS: float = 15.0

    # Column ids on the board
    MONDAY_ITEM_EFFORT_COLUMN: str = "numeric_mksee97s"
    MONDAY_SUBITEM_EFFORT_COLUMN: str = "numeric_mksezpbh"
    MONDAY_ASSIGNEE_COLUMN: str = "person"
    MONDAY_STATUS_COLUMN: str = "status"
    MONDAY_DUE_DATE_COLUMN: str = "date4"

    # =========================================================================
    # CAPACITY
    # =========================================================================
    DEFAULT_MEMBER_CAPACITY: float = 40.0

    # Last good workload views kept for stale fallback, least recently used evicted first
    VIEW_CACHE_SIZE: int = 64

    # =========================================================================
    # OBSERVABILITY
    # =========================================================================
    METRICS_ENABLED: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for easy import
settings = get_settings()
