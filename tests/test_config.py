# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================
# Tests for app.config: duration parsing, URL rewriting and fail-fast
# validation of placeholder values.
#
# Run with: pytest tests/test_config.py -v
# =============================================================================

from datetime import timedelta

import pytest
from pydantic import ValidationError

from app.config import Settings, parse_duration

BASE = {
    "DATABASE_URL": "sqlite+aiosqlite:///./config-test.db",
    "JWT_SECRET": "config-test-secret-123",
    "SUPABASE_URL": "https://test-project.supabase.co",
    "SUPABASE_SERVICE_ROLE_KEY": "service-role-key",
}


def make_settings(**overrides) -> Settings:
    return Settings(**{**BASE, **overrides})


class TestParseDuration:
    """Tests for parse_duration."""

    @pytest.mark.parametrize("value, expected", [
        ("7d", timedelta(days=7)),
        ("12h", timedelta(hours=12)),
        ("15m", timedelta(minutes=15)),
        ("30s", timedelta(seconds=30)),
        ("2w", timedelta(weeks=2)),
        ("3600", timedelta(seconds=3600)),
    ])
    def test_valid(self, value, expected):
        assert parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["", "7 days", "d", "0d", "-1h"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)


class TestSettings:
    """Tests for Settings validation."""

    def test_defaults(self):
        settings = make_settings()

        assert settings.API_PORT == 4000
        assert settings.SUPABASE_STORAGE_BUCKET == "images"
        assert settings.jwt_expires_delta == timedelta(days=7)
        assert settings.max_body_size_bytes == 80 * 1024 * 1024

    @pytest.mark.parametrize("url", [
        "postgres://user:pw@db:5432/portfolio",
        "postgresql://user:pw@db:5432/portfolio",
    ])
    def test_postgres_url_uses_asyncpg(self, url):
        settings = make_settings(DATABASE_URL=url)

        assert settings.DATABASE_URL == "postgresql+asyncpg://user:pw@db:5432/portfolio"

    def test_short_secret_is_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(JWT_SECRET="short")

    def test_invalid_expiry_is_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(JWT_EXPIRES_IN="forever")

    @pytest.mark.parametrize("url", [
        "https://YOUR_PROJECT_ID.supabase.co",
        "https://example.com",
        "test-project.supabase.co",
    ])
    def test_placeholder_url_is_rejected(self, url):
        with pytest.raises(ValidationError):
            make_settings(SUPABASE_URL=url)

    def test_placeholder_key_is_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(SUPABASE_SERVICE_ROLE_KEY="YOUR_SUPABASE_SERVICE_ROLE_KEY")

    def test_trailing_slash_is_dropped(self):
        assert make_settings(SUPABASE_URL="https://abc.supabase.co/").SUPABASE_URL == "https://abc.supabase.co"

    def test_cors_origins_list(self):
        settings = make_settings(CORS_ORIGINS="http://localhost:3000, https://portfolio.dev,")

        assert settings.cors_origins_list == ["http://localhost:3000", "https://portfolio.dev"]
