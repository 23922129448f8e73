"""
Configuration settings for the financial trend analysis service.
All settings are loaded from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # API settings
    api_title: str = "Financial Trend Analysis API"
    api_version: str = "1.0.0"
    cors_origins: list[str] = ["*"]

    # Request limits
    max_series_length: int = 200  # data points per submitted series

    # TTM series defaults
    default_ttm_periods: int = 4
    max_ttm_periods: int = 12

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
