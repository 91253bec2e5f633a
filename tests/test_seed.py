# =============================================================================
# tests/test_seed.py - Admin Seeding Tests
# =============================================================================
# Tests for scripts/seed_admin.py and UserService.upsert_admin.
#
# Run with: pytest tests/test_seed.py -v
# =============================================================================

import asyncio

import pytest

from core.database import Database
from core.services.user_service import UserService
from scripts import seed_admin as seed_module
from scripts.seed_admin import SeedConfigError, resolve_seed_credentials, seed_admin


def authenticate(settings, email, password):
    async def run():
        database = Database.from_settings(settings)
        try:
            async with database.session() as session:
                return await UserService(session).authenticate(email, password)
        finally:
            await database.dispose()

    return asyncio.run(run())


class TestResolveSeedCredentials:
    """Tests for resolve_seed_credentials."""

    def test_normalizes_email(self, settings):
        settings = settings.model_copy(
            update={"SEED_ADMIN_EMAIL": "  Admin@Portfolio.DEV ", "SEED_ADMIN_PASSWORD": " s3cret "}
        )

        assert resolve_seed_credentials(settings) == ("admin@portfolio.dev", "s3cret")

    @pytest.mark.parametrize("email, password", [(None, "pw"), ("a@b.dev", None), ("  ", "pw"), ("a@b.dev", "  ")])
    def test_missing_values(self, settings, email, password):
        settings = settings.model_copy(update={"SEED_ADMIN_EMAIL": email, "SEED_ADMIN_PASSWORD": password})

        with pytest.raises(SeedConfigError):
            resolve_seed_credentials(settings)


class TestSeedAdmin:
    """Tests for the seed command."""

    def test_creates_then_resets_password(self, settings):
        first = settings.model_copy(
            update={"SEED_ADMIN_EMAIL": "admin@portfolio.dev", "SEED_ADMIN_PASSWORD": "first-password"}
        )
        second = first.model_copy(update={"SEED_ADMIN_PASSWORD": "second-password"})

        assert asyncio.run(seed_admin(first)) == "admin@portfolio.dev"
        assert authenticate(first, "admin@portfolio.dev", "first-password") is not None

        asyncio.run(seed_admin(second))

        assert authenticate(second, "admin@portfolio.dev", "first-password") is None
        assert authenticate(second, "ADMIN@portfolio.dev", "second-password") is not None

    def test_main_without_credentials(self, settings, monkeypatch, capsys):
        monkeypatch.setattr(seed_module, "get_settings", lambda: settings)

        assert seed_module.main() == 1
        assert "SEED_ADMIN_EMAIL" in capsys.readouterr().out
