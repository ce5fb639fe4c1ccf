"""
Frontend configuration using pydantic-settings.

Every value can be overridden with a FRONTEND_-prefixed environment
variable (e.g. FRONTEND_API_BASE_URL).
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class FrontendSettings(BaseSettings):
    """Settings for the Streamlit client."""

    model_config = SettingsConfigDict(
        env_prefix="FRONTEND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_base_url: str = "http://localhost:8000/api"

    # Seconds before an API request is abandoned
    request_timeout: float = 10.0

    # Size of the single bulk fetch the client filters locally
    bulk_page_size: int = 1000

    # Bulk fetch retry policy
    retry_count: int = 3
    retry_interval: float = 5.0

    page_size_options: List[int] = [5, 10, 20, 50]
    default_page_size: int = 10


@lru_cache
def get_frontend_settings() -> FrontendSettings:
    return FrontendSettings()
