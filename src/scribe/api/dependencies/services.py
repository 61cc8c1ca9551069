"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.scribe.api.dependencies.db import DBSession
from src.scribe.api.dependencies.repositories import ChangelogRepo, ProjectRepo, UserRepo
from src.scribe.core.config import get_settings
from src.scribe.integrations.gemini import GeminiProvider, LLMProvider
from src.scribe.integrations.github import GitHubClient
from src.scribe.services import (
    AccessService,
    AuthService,
    ChangelogService,
    DraftGenerator,
    GenerationService,
    ProjectService,
)
from src.scribe.services.access_service import GitHubClientFactory


def get_github_client_factory() -> GitHubClientFactory:
    """Builds a GitHub client per credential."""
    return GitHubClient.for_token


def get_llm_provider() -> LLMProvider:
    return GeminiProvider.from_settings()


GitHubFactory = Annotated[GitHubClientFactory, Depends(get_github_client_factory)]
LLM = Annotated[LLMProvider, Depends(get_llm_provider)]


def get_project_service(
    project_repo: ProjectRepo,
    changelog_repo: ChangelogRepo,
    session: DBSession,
) -> ProjectService:
    return ProjectService(project_repo, changelog_repo, session)


def get_changelog_service(
    changelog_repo: ChangelogRepo,
    project_repo: ProjectRepo,
    session: DBSession,
) -> ChangelogService:
    return ChangelogService(changelog_repo, project_repo, session)


def get_access_service(
    project_repo: ProjectRepo,
    changelog_repo: ChangelogRepo,
    github_factory: GitHubFactory,
) -> AccessService:
    return AccessService(project_repo, changelog_repo, github_factory)


def get_auth_service(
    user_repo: UserRepo,
    session: DBSession,
    github_factory: GitHubFactory,
) -> AuthService:
    return AuthService(user_repo, session, github_factory)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
ChangelogServiceDep = Annotated[ChangelogService, Depends(get_changelog_service)]
AccessServiceDep = Annotated[AccessService, Depends(get_access_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def get_generation_service(
    project_service: ProjectServiceDep,
    changelog_service: ChangelogServiceDep,
    access_service: AccessServiceDep,
    provider: LLM,
    github_factory: GitHubFactory,
    session: DBSession,
) -> GenerationService:
    settings = get_settings()
    return GenerationService(
        project_service,
        changelog_service,
        access_service,
        DraftGenerator(provider, settings.generation_timeout_seconds),
        github_factory,
        session,
        lookback_days=settings.default_lookback_days,
    )


GenerationServiceDep = Annotated[GenerationService, Depends(get_generation_service)]
