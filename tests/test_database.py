"""Tests for engine construction."""

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from dropcard.db.database import is_sqlite


class TestIsSqlite:
    @pytest.mark.parametrize(
        "url",
        ["sqlite+aiosqlite:///./dropcard.db", "sqlite:///:memory:", "sqlite+aiosqlite:///:memory:"],
    )
    def test_sqlite_urls(self, url: str) -> None:
        assert is_sqlite(url)

    def test_other_backends(self) -> None:
        assert not is_sqlite("postgresql+asyncpg://user:pw@localhost/dropcard")


class TestBuildEngine:
    async def test_sqlite_enforces_foreign_keys(self, async_engine: AsyncEngine) -> None:
        async with async_engine.connect() as conn:
            result = await conn.execute(text("PRAGMA foreign_keys"))

            assert result.scalar_one() == 1
