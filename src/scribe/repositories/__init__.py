"""Repository layer - data access abstraction."""

from src.scribe.repositories.base import BaseRepository
from src.scribe.repositories.changelog import ChangelogRepository
from src.scribe.repositories.project import ProjectRepository
from src.scribe.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "ChangelogRepository",
    "ProjectRepository",
    "UserRepository",
]
