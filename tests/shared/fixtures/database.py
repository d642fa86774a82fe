"""
SQLite fixtures for integration tests.

Every test gets its own in-memory database with all tables created, so
tests never see each other's rows.

Usage:
    # In your test file or conftest.py
    from tests.shared.fixtures.database import db_session

    async def test_something(db_session):
        repo = SomeRepository(db_session)
        await repo.save(entity)
"""

from uuid import UUID

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Import models to register them with Base.metadata
import basket.infrastructure.persistence.sqlalchemy.models  # noqa: F401
import basket_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from basket.infrastructure.persistence.sqlalchemy.models.base import Base

# Fixed UUIDs for testing - ensures deterministic behavior
TEST_USER_ID = UUID("12345678-1234-5678-1234-567812345678")
TEST_USER_ID_2 = UUID("00000000-0000-0000-0000-000000000002")


@pytest.fixture
async def async_engine():
    """In-memory SQLite engine with a fresh schema."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(session_maker):
    """A session on the test database, rolled back after the test."""
    async with session_maker() as session:
        yield session
        await session.rollback()
