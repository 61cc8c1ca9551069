"""API dependencies - Lobby Pattern."""

from src.scribe.api.dependencies.auth import (
    CurrentUser,
    OwnedChangelog,
    OwnedProject,
    require_authenticated,
    require_changelog_ownership,
    require_project_ownership,
)
from src.scribe.api.dependencies.db import DBSession, get_db_session
from src.scribe.api.dependencies.repositories import (
    ChangelogRepo,
    ProjectRepo,
    UserRepo,
    get_changelog_repository,
    get_project_repository,
    get_user_repository,
)
from src.scribe.api.dependencies.services import (
    AccessServiceDep,
    AuthServiceDep,
    ChangelogServiceDep,
    GenerationServiceDep,
    ProjectServiceDep,
    get_github_client_factory,
    get_llm_provider,
)

__all__ = [
    # Auth
    "CurrentUser",
    "OwnedChangelog",
    "OwnedProject",
    "require_authenticated",
    "require_changelog_ownership",
    "require_project_ownership",
    # DB
    "DBSession",
    "get_db_session",
    # Repositories
    "ChangelogRepo",
    "ProjectRepo",
    "UserRepo",
    "get_changelog_repository",
    "get_project_repository",
    "get_user_repository",
    # Services
    "AccessServiceDep",
    "AuthServiceDep",
    "ChangelogServiceDep",
    "GenerationServiceDep",
    "ProjectServiceDep",
    "get_github_client_factory",
    "get_llm_provider",
]
