"""Access control checks for projects, changelogs and GitHub repositories.

Project ownership (the Scribe-side owner_id) and repository access (what
GitHub lets the user do) are separate capabilities and are checked
independently.
"""

from collections.abc import Callable
from uuid import UUID

from src.scribe.core.exceptions import (
    NotFound,
    OwnershipRequired,
    RepositoryAccessRequired,
)
from src.scribe.core.logging import get_logger
from src.scribe.core.security import normalize_repo_url, parse_repo_url
from src.scribe.integrations.github import GitHubClient, RepositoryAccess
from src.scribe.models import Changelog, Project, User
from src.scribe.repositories import ChangelogRepository, ProjectRepository

logger = get_logger(__name__)

GitHubClientFactory = Callable[[str | None], GitHubClient]


class AccessService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        changelog_repo: ChangelogRepository,
        github_factory: GitHubClientFactory,
    ):
        self.project_repo = project_repo
        self.changelog_repo = changelog_repo
        self.github_factory = github_factory

    async def require_project_ownership(self, project_id: UUID, user_id: UUID) -> Project:
        """Raises NotFound, or OwnershipRequired when the user is not the project owner."""
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFound("Project not found")
        if project.owner_id != user_id:
            logger.warning("Project ownership denied", project_id=str(project_id))
            raise OwnershipRequired("You can only modify projects that you own")
        return project

    async def require_changelog_ownership(self, changelog_id: UUID, user_id: UUID) -> Changelog:
        """Raises NotFound, or OwnershipRequired when the user did not create the changelog."""
        changelog = await self.changelog_repo.get_by_id(changelog_id)
        if changelog is None:
            raise NotFound("Changelog not found")
        if changelog.created_by != user_id:
            logger.warning("Changelog ownership denied", changelog_id=str(changelog_id))
            raise OwnershipRequired("You can only modify changelogs that you created")
        return changelog

    async def require_repository_access(self, repo_url: str, user: User) -> RepositoryAccess:
        """Ask GitHub, with the user's own credential, whether they can see the repository.

        Raises:
            InvalidRepositoryUrl: If repo_url is malformed.
            RepositoryAccessRequired: If GitHub reports no access.
        """
        owner, repo = parse_repo_url(normalize_repo_url(repo_url))
        client = self.github_factory(user.access_token)
        access = await client.get_repository_access(owner, repo, user.username)
        if not access.can_access:
            logger.warning("Repository access denied", repo=f"{owner}/{repo}")
            raise RepositoryAccessRequired()
        return access
