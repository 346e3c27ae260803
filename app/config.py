# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   print(get_settings().PORT)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

import logging
from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_MAX_BODY_BYTES = 102400


def resolve_port(value: Any) -> int:
    """
    Resolve the listen port from a raw environment value.

    Missing or unparseable values fall back to DEFAULT_PORT. This never
    raises: a bad PORT is logged and ignored.

    Example:
        resolve_port("8080") -> 8080
        resolve_port(None) -> 3000
        resolve_port("http") -> 3000
    """
    if value is None or value == "":
        return DEFAULT_PORT
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unparseable PORT value {value!r}, using {DEFAULT_PORT}")
        return DEFAULT_PORT


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Settings are built once at startup and treated as immutable afterwards.
    """

    # -------------------------------------------------------------------------
    # HTTP Listener
    # -------------------------------------------------------------------------

    PORT: int = Field(
        default=DEFAULT_PORT,
        description="Port for the HTTP listener"
    )

    HOST: str = Field(
        default="0.0.0.0",
        description="Address to bind the HTTP listener to"
    )

    # -------------------------------------------------------------------------
    # MongoDB Configuration
    # -------------------------------------------------------------------------

    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017/tutorials_db",
        description="MongoDB connection string"
    )

    MONGODB_DATABASE: str = Field(
        default="tutorials_db",
        description="Database used when MONGODB_URL does not name one"
    )

    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = Field(
        default=5000,
        ge=1,
        description="How long the driver waits for a reachable server (ms)"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    # Request bodies larger than this are rejected with 413
    MAX_BODY_BYTES: int = Field(
        default=DEFAULT_MAX_BODY_BYTES,
        ge=1,
        description="Largest request body the parsing middleware accepts (bytes)"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:8081",
        description="Allowed CORS origins (comma-separated)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        frozen=True,
    )

    @field_validator("PORT", mode="before")
    @classmethod
    def _permissive_port(cls, value: Any) -> int:
        return resolve_port(value)

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:8081, https://myapp.com" -> ["http://localhost:8081", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once.
    """
    return Settings()
