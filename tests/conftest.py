from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dropcard.db.database import build_engine, get_session
from dropcard.main import app
from dropcard.models.db import Base


@pytest.fixture
def added_on() -> date:
    """Fixed date for notes preambles."""
    return date(2024, 3, 5)


@pytest.fixture
def sample_vcard() -> str:
    """A business card vCard as a phone camera reads it."""
    return "\n".join(
        [
            "BEGIN:VCARD",
            "VERSION:3.0",
            "N:Smith;Jane;;;",
            "FN:Jane Smith",
            "ORG:Acme Corp",
            "TITLE:Head of Sales",
            "EMAIL:jane@acme.com",
            "TEL:+1 555 0100",
            "URL:https://acme.com",
            "ADR:;;123 Main St;Springfield;IL;62701;USA",
            "X-SOCIALPROFILE;TYPE=linkedin:https://linkedin.com/in/janesmith",
            "END:VCARD",
        ]
    )


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
async def client(async_engine):
    """Provide an async test client with overridden database session."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
