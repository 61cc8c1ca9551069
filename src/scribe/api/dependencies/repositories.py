"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.scribe.api.dependencies.db import DBSession
from src.scribe.repositories import (
    ChangelogRepository,
    ProjectRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_changelog_repository(session: DBSession) -> ChangelogRepository:
    return ChangelogRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
ChangelogRepo = Annotated[ChangelogRepository, Depends(get_changelog_repository)]
