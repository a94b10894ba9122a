"""Configuration handling for the Hostaway availability gateway."""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    redis_url: str | None = None
    hostaway_base_url: str = "https://api.hostaway.com"
    hostaway_account_id: str | None = None
    hostaway_api_key: str | None = None
    http_timeout_seconds: int = 30
    token_ttl_seconds: int = 3600 * 24 * 30
    availability_ttl_seconds: int = 3600
    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()
