# =============================================================================
# core/database.py - Relational Store Access
# =============================================================================
# Owns the SQLAlchemy async engine and session factory.
#
# One Database instance is built from Settings at startup (see app.main) and
# kept on app.state; each request gets its own AsyncSession through the
# get_session dependency.
#
# Usage:
#   database = Database.from_settings(settings)
#   async with database.session() as session:
#       await session.execute(...)
# =============================================================================

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM entities."""
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Async engine plus session factory."""

    def __init__(self, url: str, *, echo: bool = False):
        self.url = url
        self.is_sqlite = url.startswith("sqlite")

        engine_options = {"echo": echo}
        if not self.is_sqlite:
            engine_options["pool_pre_ping"] = True

        self.engine: AsyncEngine = create_async_engine(url, **engine_options)

        if self.is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(settings.DATABASE_URL, echo=settings.DB_ECHO)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session and make sure it is closed afterwards."""
        async with self.session_factory() as session:
            yield session

    async def create_all(self) -> None:
        """Create missing tables for every registered entity."""
        # Registers the mappers on Base.metadata
        from core import entities  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def ping(self) -> None:
        """Run a trivial query; raises if the store is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()
