"""Application configuration management using Pydantic Settings.

This module defines the `Settings` class, which loads configuration parameters
from environment variables and a `.env` file. It centralizes the location of
the admin API, optional credentials, HTTP timeout, logging level and the
display format used for journal timestamps.

The `get_settings` function provides a cached, singleton instance of the
configuration, ensuring consistent settings throughout the application.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict as _SettingsConfigDict


class Settings(BaseSettings):
    """Defines all application configuration parameters.

    Values come from environment variables or a `.env` file. The admin API is
    addressed as ``ADMIN_BASE_URL + ADMIN_API_PREFIX``; the default prefix
    targets the admin proxy (``/api``), while ``/__admin`` talks to a WireMock
    instance directly.
    """

    model_config = _SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Admin API location
    ADMIN_BASE_URL: str = Field(
        default="http://localhost:8080", description="Base URL of the admin API host"
    )
    ADMIN_API_PREFIX: str = Field(
        default="/api",
        description="Path prefix for admin endpoints ('/api' for the proxy, '/__admin' for WireMock)",
    )
    ADMIN_USERNAME: Optional[str] = Field(default=None, description="Optional basic auth user")
    ADMIN_PASSWORD: Optional[str] = Field(default=None, description="Optional basic auth password")
    HTTP_TIMEOUT: float = Field(default=30.0, description="Timeout (seconds) for admin API requests")

    # Logging & display
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    TIMESTAMP_FORMAT: str = Field(
        default="%c",
        description="strftime pattern used to display numeric journal timestamps (local time)",
    )

    @field_validator("ADMIN_BASE_URL", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @field_validator("ADMIN_API_PREFIX", mode="before")
    @classmethod
    def normalize_prefix(cls, v: Any) -> Any:
        """Ensure the prefix starts with exactly one slash and has none trailing.

        A blank value means endpoints live at the host root.
        """
        if v is None:
            return ""
        if isinstance(v, str):
            trimmed = v.strip().strip("/")
            return f"/{trimmed}" if trimmed else ""
        return v

    @field_validator("ADMIN_USERNAME", "ADMIN_PASSWORD", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def admin_api_url(self) -> str:
        return f"{self.ADMIN_BASE_URL}{self.ADMIN_API_PREFIX}"

    @property
    def basic_auth(self) -> Optional[tuple[str, str]]:
        if self.ADMIN_USERNAME is None:
            return None
        return (self.ADMIN_USERNAME, self.ADMIN_PASSWORD or "")


@lru_cache(maxsize=1)
def get_settings() -> Settings:  # pragma: no cover - trivial
    """Return a cached, singleton instance of the application settings."""
    return Settings()
