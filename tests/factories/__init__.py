"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, commit_sha, utc_now
from tests.factories.project import ChangelogFactory, ProjectFactory
from tests.factories.user import UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "commit_sha",
    "utc_now",
    # Models
    "ChangelogFactory",
    "ProjectFactory",
    "UserFactory",
]
