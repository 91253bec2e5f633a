# =============================================================================
# core/services/user_service.py - Admin Accounts
# =============================================================================
# Password checks for login and the admin upsert used by the seed command.
# Emails are stored trimmed and lowercased.
# =============================================================================

import logging

from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.entities import User

logger = logging.getLogger(__name__)

# pbkdf2_sha256 needs no native bcrypt build
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


class UserService:
    """Service for admin account operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> User | None:
        return await self.session.scalar(select(User).where(User.email == normalize_email(email)))

    async def authenticate(self, email: str, password: str) -> User | None:
        """
        Return the user when the credentials match, otherwise None.

        Unknown emails and wrong passwords are indistinguishable to callers.
        """
        user = await self.get_by_email(email)
        if user is None:
            logger.warning("Login attempt for unknown email")
            return None

        if not verify_password(password, user.password_hash):
            logger.warning(f"Invalid password for user {user.id}")
            return None

        return user

    async def upsert_admin(self, email: str, password: str) -> User:
        """Create the admin account, or reset its password if it exists."""
        email = normalize_email(email)
        user = await self.get_by_email(email)

        if user is None:
            user = User(email=email, password_hash=hash_password(password))
            self.session.add(user)
            action = "Created"
        else:
            user.password_hash = hash_password(password)
            action = "Updated"

        await self.session.commit()
        await self.session.refresh(user)

        logger.info(f"{action} admin user: {user.email}")
        return user
