# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#   app = create_app(settings)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The Settings class validates all values at startup, so a missing secret or a
# placeholder storage credential stops the process before it serves traffic.
# Components receive the Settings instance explicitly; nothing reads
# os.environ at request time.
# =============================================================================

import re
from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Accepts "3600", "30s", "15m", "12h", "7d", "2w"
_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$")

_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}

_URL_PLACEHOLDERS = ("YOUR_PROJECT_ID", "example.com")
_KEY_PLACEHOLDERS = ("YOUR_SUPABASE_SERVICE_ROLE_KEY",)


def parse_duration(value: str) -> timedelta:
    """
    Parse a compact duration string into a timedelta.

    Example:
        parse_duration("7d")   # timedelta(days=7)
        parse_duration("900")  # timedelta(seconds=900)
    """
    match = _DURATION_PATTERN.match(value)
    if not match:
        raise ValueError(
            f"Invalid duration '{value}'. Use a number with an optional unit (s, m, h, d, w), e.g. '7d'"
        )
    amount, unit = match.groups()
    if int(amount) <= 0:
        raise ValueError("Duration must be greater than zero")
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development
    """

    # -------------------------------------------------------------------------
    # Database Configuration
    # -------------------------------------------------------------------------

    DATABASE_URL: str = Field(
        ...,
        description="SQLAlchemy database URL (postgresql://... or sqlite+aiosqlite:///...)"
    )

    DB_ECHO: bool = Field(
        default=False,
        description="Log every SQL statement (noisy, development only)"
    )

    DB_CREATE_TABLES: bool = Field(
        default=True,
        description="Create missing tables on startup"
    )

    # -------------------------------------------------------------------------
    # Token Configuration
    # -------------------------------------------------------------------------

    JWT_SECRET: str = Field(
        ...,
        min_length=16,
        description="Secret key for signing admin access tokens"
    )

    JWT_EXPIRES_IN: str = Field(
        default="7d",
        description="Access token lifetime (e.g. '3600', '12h', '7d')"
    )

    # -------------------------------------------------------------------------
    # Supabase Storage Configuration
    # -------------------------------------------------------------------------

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_ROLE_KEY: str = Field(
        ...,
        min_length=1,
        description="Supabase service_role key used for storage uploads"
    )

    SUPABASE_STORAGE_BUCKET: str = Field(
        default="images",
        min_length=1,
        description="Storage bucket that receives uploaded images"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "test", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=4000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    MAX_BODY_SIZE_MB: int = Field(
        default=80,
        ge=1,
        le=500,
        description="Requests declaring a larger Content-Length are rejected"
    )

    # -------------------------------------------------------------------------
    # Admin Seeding
    # -------------------------------------------------------------------------

    SEED_ADMIN_EMAIL: str | None = Field(
        default=None,
        description="Email of the admin account created by scripts/seed_admin.py"
    )

    SEED_ADMIN_PASSWORD: str | None = Field(
        default=None,
        description="Password of the admin account created by scripts/seed_admin.py"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------

    @field_validator("DATABASE_URL")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        """Point bare postgres URLs at the asyncpg driver."""
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return "postgresql+asyncpg://" + v[len(prefix):]
        return v

    @field_validator("JWT_EXPIRES_IN")
    @classmethod
    def check_expiry(cls, v: str) -> str:
        parse_duration(v)
        return v

    @field_validator("SUPABASE_URL")
    @classmethod
    def reject_placeholder_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("SUPABASE_URL must be an http(s) URL")
        if any(placeholder in v for placeholder in _URL_PLACEHOLDERS):
            raise ValueError("SUPABASE_URL is still a placeholder value")
        return v.rstrip("/")

    @field_validator("SUPABASE_SERVICE_ROLE_KEY")
    @classmethod
    def reject_placeholder_key(cls, v: str) -> str:
        if any(placeholder in v for placeholder in _KEY_PLACEHOLDERS):
            raise ValueError("SUPABASE_SERVICE_ROLE_KEY is still a placeholder value")
        return v

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def jwt_expires_delta(self) -> timedelta:
        return parse_duration(self.JWT_EXPIRES_IN)

    @property
    def max_body_size_bytes(self) -> int:
        return self.MAX_BODY_SIZE_MB * 1024 * 1024

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()
