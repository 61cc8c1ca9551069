"""Repository for Project entity."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.scribe.models import Project
from src.scribe.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project

    async def get_by_repo_url(self, repo_url: str) -> Project | None:
        """Get project by its normalized repository URL."""
        result = await self.session.execute(select(Project).where(Project.repo_url == repo_url))
        return result.scalar_one_or_none()

    async def list_recent(
        self,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Project], str | None, bool]:
        """List projects, most recently updated first.

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        query = select(Project)
        return await self.paginate(query, cursor, limit, Project.updated_at)

    async def touch(self, project_id: UUID, moment: datetime) -> None:
        """Set updated_at without loading the row."""
        stmt = (
            update(Project)
            .where(Project.id == project_id)  # type: ignore[arg-type]
            .values(updated_at=moment)
        )
        await self.session.execute(stmt)
