"""Database utilities - engine and session."""

from src.scribe.core.db.engine import (
    connect_engine,
    dispose_engine,
    get_engine,
    ping_database,
)
from src.scribe.core.db.session import get_session

__all__ = [
    # Engine
    "connect_engine",
    "dispose_engine",
    "get_engine",
    "ping_database",
    # Session
    "get_session",
]
