"""Project registry - one project per repository URL."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.scribe.core.exceptions import DuplicateRepository, InvalidRepositoryUrl, NotFound
from src.scribe.core.logging import get_logger
from src.scribe.core.security import normalize_repo_url, parse_repo_url
from src.scribe.models import Project
from src.scribe.models.base import utc_now
from src.scribe.repositories import ChangelogRepository, ProjectRepository

logger = get_logger(__name__)


class ProjectService:
    """Project registry - business logic only.

    Writes are flushed, not committed: resolve_or_create_project runs inside
    the generation request's unit of work, which commits or rolls back.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        changelog_repo: ChangelogRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.changelog_repo = changelog_repo
        self.session = session

    async def resolve_or_create_project(
        self,
        name: str,
        repo_url: str,
        owner_user_id: UUID | None,
    ) -> Project:
        """Return the project for repo_url, creating it on first use.

        An existing project keeps its name. Its owner is filled in only when
        it has none, and its owner/repo fields only when they are missing.

        Raises:
            InvalidRepositoryUrl: If repo_url is not a GitHub repository URL.
            DuplicateRepository: If a concurrent request created the same project first.
        """
        repo_url = normalize_repo_url(repo_url)

        project = await self.project_repo.get_by_repo_url(repo_url)
        if project is not None:
            changed = False
            if project.owner_id is None and owner_user_id is not None:
                project.owner_id = owner_user_id
                changed = True
            if not project.github_repo_owner or not project.github_repo_name:
                project.github_repo_owner, project.github_repo_name = project.repo_coordinates
                changed = True
            if changed:
                project.updated_at = utc_now()
                await self.session.flush()
            return project

        try:
            owner, repo = parse_repo_url(repo_url)
        except InvalidRepositoryUrl:
            logger.error("Normalized repository URL failed to parse", repo_url=repo_url)
            raise

        now = utc_now()
        project = Project(
            name=name,
            repo_url=repo_url,
            owner_id=owner_user_id,
            github_repo_owner=owner,
            github_repo_name=repo,
            created_at=now,
            updated_at=now,
        )
        self.project_repo.add(project)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            logger.info("Lost project creation race", repo_url=repo_url)
            raise DuplicateRepository() from e

        logger.info("Project created", project_id=str(project.id), repo_url=repo_url)
        return project

    async def get_project(self, project_id: UUID) -> Project:
        """Raises NotFound if the project does not exist."""
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFound("Project not found")
        return project

    async def list_projects(
        self, cursor: str | None, limit: int
    ) -> tuple[list[Project], str | None, bool]:
        """List projects, most recently updated first.

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        return await self.project_repo.list_recent(cursor, limit)

    async def delete_project(self, project: Project) -> int:
        """Delete a project and all of its changelogs.

        Returns:
            Number of changelogs deleted alongside the project.
        """
        deleted = await self.changelog_repo.delete_for_project(project.id)
        await self.project_repo.delete(project)
        await self.session.commit()
        logger.info("Project deleted", project_id=str(project.id), changelogs_deleted=deleted)
        return deleted
