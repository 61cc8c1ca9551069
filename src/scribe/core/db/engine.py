"""Database engine management."""

import asyncio

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.scribe.core.config import get_settings
from src.scribe.core.exceptions import StorageUnavailable
from src.scribe.core.logging import get_logger

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_connected = False
_connect_lock = asyncio.Lock()


def get_engine() -> AsyncEngine:
    """Get or create the database engine singleton."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_pre_ping=True,
        )
    return _engine


async def ping_database(engine: AsyncEngine | None = None) -> None:
    """Run a trivial query. Raises StorageUnavailable when the database is unreachable."""
    engine = engine or get_engine()
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except (OSError, DBAPIError) as e:
        raise StorageUnavailable() from e


async def connect_engine() -> AsyncEngine:
    """Create the engine and verify connectivity once per process.

    Concurrent callers wait on the same connection attempt instead of
    opening redundant connections. A failed attempt is not cached, so the
    next caller retries.
    """
    global _connected
    engine = get_engine()
    if _connected:
        return engine
    async with _connect_lock:
        if not _connected:
            await ping_database(engine)
            _connected = True
            logger.info("Database connection established")
    return engine


async def dispose_engine() -> None:
    """Dispose the database engine. Call during shutdown."""
    global _engine, _connected
    if _engine is not None:
        await _engine.dispose()
        _engine = None
    _connected = False
