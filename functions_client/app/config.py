"""
Configuration module for the Functions Client.

This module uses Pydantic Settings to load and validate environment variables
for the remote functions endpoint, service scoping, HTTP timeouts and logging.

Environment variables are loaded from .env file or system environment.
"""

from functools import lru_cache

import httpx
from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Only the base URL is required; every other setting has a default.
    """

    # =========================================================================
    # Remote Functions Endpoint
    # =========================================================================

    FUNCTIONS_BASE_URL: HttpUrl = Field(
        ...,
        description="Base URL of the server hosting /functions/call (e.g., https://functions.example.com)",
    )

    FUNCTIONS_PATH_PREFIX: str = Field(
        default="",
        description="Path prepended to every request (e.g., /api/client/v2.0/app/my-app-id)",
    )

    FUNCTIONS_SERVICE_NAME: str = Field(
        default="",
        description="Backend service to scope calls to (empty for unscoped calls)",
    )

    # =========================================================================
    # HTTP Timeouts
    # =========================================================================

    FUNCTIONS_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="Overall timeout for a function call in seconds",
        ge=1,
        le=300,
    )

    FUNCTIONS_CONNECT_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Connect timeout in seconds",
        ge=1,
        le=60,
    )

    # =========================================================================
    # Logging
    # =========================================================================

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # =========================================================================
    # Pydantic Settings Configuration
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra env vars not defined here
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("FUNCTIONS_PATH_PREFIX")
    @classmethod
    def normalize_path_prefix(cls, v: str) -> str:
        """Ensure a non-empty prefix starts with '/' and has no trailing '/'"""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def base_url_str(self) -> str:
        """Base URL as a string without the trailing slash HttpUrl adds."""
        return str(self.FUNCTIONS_BASE_URL).rstrip("/")

    @property
    def http_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            self.FUNCTIONS_TIMEOUT_SECONDS,
            connect=self.FUNCTIONS_CONNECT_TIMEOUT_SECONDS,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Call get_settings.cache_clear() after changing the environment.
    """
    return Settings()
