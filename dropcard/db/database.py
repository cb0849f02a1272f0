"""
Database engine and session management.

DropCard runs on SQLite (aiosqlite) by default and on any async SQLAlchemy
URL in deployment. SQLite leaves foreign keys unenforced unless each
connection turns them on, so engines built here do that on connect.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from dropcard.config import settings
from dropcard.models.db import Base


def is_sqlite(database_url: str) -> bool:
    """True for sqlite URLs, with or without an async driver."""
    return make_url(database_url).get_backend_name() == "sqlite"


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement for every new SQLite connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Async engine for a database URL, with SQLite foreign keys enforced."""
    if is_sqlite(database_url):
        built = create_async_engine(database_url, echo=echo)
        enable_sqlite_foreign_keys(built)
        return built
    return create_async_engine(database_url, echo=echo, pool_pre_ping=True)


engine = build_engine(settings.database_url, echo=settings.debug)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Commits when the request handler returns, rolls back on database errors.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the cards, contacts, profiles and follow-ups tables if missing."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
