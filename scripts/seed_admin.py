#!/usr/bin/env python3
# =============================================================================
# scripts/seed_admin.py - Create or Reset the Admin Account
# =============================================================================
# Reads SEED_ADMIN_EMAIL and SEED_ADMIN_PASSWORD from the environment (or
# .env) and upserts the admin user. Running it again resets the password.
#
# Usage:
#   python -m scripts.seed_admin
# =============================================================================

import asyncio
import logging
import sys

from app.config import Settings, get_settings
from core.database import Database
from core.services.user_service import UserService, normalize_email

logger = logging.getLogger(__name__)


class SeedConfigError(Exception):
    """Seed credentials are missing from the environment."""


def resolve_seed_credentials(settings: Settings) -> tuple[str, str]:
    """
    Return (email, password) for the admin account.

    Raises:
        SeedConfigError: If either value is missing or blank
    """
    email = normalize_email(settings.SEED_ADMIN_EMAIL or "")
    password = (settings.SEED_ADMIN_PASSWORD or "").strip()

    if not email or not password:
        raise SeedConfigError("SEED_ADMIN_EMAIL and SEED_ADMIN_PASSWORD are required")

    return email, password


async def seed_admin(settings: Settings) -> str:
    """Upsert the admin user and return its email."""
    email, password = resolve_seed_credentials(settings)

    database = Database.from_settings(settings)
    try:
        if settings.DB_CREATE_TABLES:
            await database.create_all()

        async with database.session() as session:
            user = await UserService(session).upsert_admin(email, password)
            return user.email
    finally:
        await database.dispose()


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        email = asyncio.run(seed_admin(get_settings()))
    except SeedConfigError as e:
        print(f"ERROR: {e}")
        print("Please set them in your .env file or environment")
        return 1

    print(f"Seeded admin user: {email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
