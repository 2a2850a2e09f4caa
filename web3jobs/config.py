"""
Configuration via environment variables.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_BASE_URL = "https://web3.career/api/v1"


class Settings(BaseSettings):
    """Settings loaded from WEB3_CAREER_* environment variables."""

    # Upstream
    token: str = ""  # opaque API credential
    base_url: str = DEFAULT_BASE_URL
    request_timeout_s: int = Field(default=20, ge=1)

    # Cache
    cache_ttl_s: int = Field(default=5 * 60, ge=0)

    # Retries
    max_retries: int = Field(default=3, ge=0)
    initial_retry_delay_ms: int = Field(default=1000, ge=0)
    max_retry_delay_ms: int = Field(default=10000, ge=0)

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    class Config:
        env_prefix = "WEB3_CAREER_"
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
