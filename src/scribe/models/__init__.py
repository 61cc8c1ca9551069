"""Model exports - Lobby Pattern.

Import from here: `from src.scribe.models import Project, Changelog`
"""

from src.scribe.models.changelog import Changelog, version_for
from src.scribe.models.enums import ChangelogStatus
from src.scribe.models.project import Project
from src.scribe.models.user import User

__all__ = [
    # Enums
    "ChangelogStatus",
    # Models
    "Changelog",
    "Project",
    "User",
    # Helpers
    "version_for",
]
