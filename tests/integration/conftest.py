"""Integration test fixtures for the SQL repositories.

These fixtures require external resources (PostgreSQL database at
DATABASE_URL). Tests are skipped when the database is unreachable.
Every test runs inside a transaction that is rolled back afterwards.
"""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from src.scribe.core.config import get_settings
from src.scribe.core.db import ping_database
from src.scribe.core.exceptions import StorageUnavailable

# Register tables on SQLModel.metadata
from src.scribe import models  # noqa: F401


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create test database engine and ensure the tables exist."""
    test_engine = create_async_engine(get_settings().database_url, poolclass=NullPool)
    try:
        await ping_database(test_engine)
    except StorageUnavailable:
        await test_engine.dispose()
        pytest.skip("PostgreSQL is not reachable at DATABASE_URL")

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session bound to an outer transaction that is always rolled back.

    Commits and rollbacks inside the test only touch a savepoint.
    """
    async with engine.connect() as conn:
        transaction = await conn.begin()
        session = AsyncSession(
            bind=conn,
            expire_on_commit=False,
            join_transaction_mode="create_savepoint",
        )
        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()
