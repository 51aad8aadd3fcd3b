"""
Settings pulled from the environment (and a ``.env`` file, if present).

    TZROUNDTRIP_DATABASE_URL      sqlite:///tzroundtrip.db
    TZROUNDTRIP_SESSION_TIMEZONE  UTC   (database session zone)
    TZROUNDTRIP_DEFAULT_TIMEZONE  UTC   (initial ambient zone)
    TZROUNDTRIP_LOG_LEVEL         INFO
    TZROUNDTRIP_LOG_FORMAT        console | json
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TZROUNDTRIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    database_url: str = "sqlite:///tzroundtrip.db"
    session_timezone: str = "UTC"
    default_timezone: str = "UTC"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (tests)."""
    global _settings
    _settings = None
