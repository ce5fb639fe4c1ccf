"""
Application configuration using pydantic-settings.

Loads environment variables from .env file and provides typed access
to configuration values throughout the application.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # MongoDB configuration
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "real_estate"
    mongodb_collection: str = "properties"

    # Origins allowed to call the API from a browser
    cors_origins: List[str] = ["http://localhost:8501"]

    # Largest pageSize accepted by the listing endpoint
    max_page_size: int = 1000

    # Application settings
    debug: bool = False
    log_level: str = "INFO"
    app_name: str = "Property Catalog API"
    app_version: str = "0.1.0"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures we only load settings once and reuse
    the same instance throughout the application lifecycle.
    """
    return Settings()
