"""Application settings and configuration."""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_BASE_URL = "http://localhost:8080/api/v1"


class Settings(BaseSettings):
    """Client configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Finance Dashboard"
    app_version: str = "0.1.0"

    # Remote service
    api_base_url: str = DEFAULT_API_BASE_URL
    api_timeout_seconds: float = 10.0

    # App behavior
    log_level: str = "INFO"
    summary_refresh_seconds: int = 30
    recent_rows_limit: int = 5
    toast_duration_ms: int = 3000

    # Forms
    default_currency: str = "USD"

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("default_currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def summary_refresh_ms(self) -> int:
        """Periodic summary refresh interval in milliseconds (0 = disabled)."""
        return max(self.summary_refresh_seconds, 0) * 1000


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
