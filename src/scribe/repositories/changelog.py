"""Repository for Changelog entity."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, func, update
from sqlmodel import col, select

from src.scribe.models import Changelog, ChangelogStatus
from src.scribe.repositories.base import BaseRepository


class ChangelogRepository(BaseRepository[Changelog]):
    """Repository for Changelog entity."""

    model = Changelog

    async def mark_published(
        self,
        changelog_id: UUID,
        summary_final: str,
        published_at: datetime,
    ) -> bool:
        """Publish a draft in a single conditional UPDATE.

        Only rows still in draft status are touched, so two concurrent
        publishes cannot both succeed.

        Returns:
            True if the draft was published, False if no draft row matched.
        """
        stmt = (
            update(Changelog)
            .where(Changelog.id == changelog_id)  # type: ignore[arg-type]
            .where(Changelog.status == ChangelogStatus.DRAFT.value)  # type: ignore[arg-type]
            .values(
                summary_final=summary_final,
                published_at=published_at,
                status=ChangelogStatus.PUBLISHED.value,
            )
        )
        result = await self.session.execute(stmt)
        return (result.rowcount or 0) > 0  # type: ignore[attr-defined]

    async def list_published(
        self,
        project_id: UUID,
        search: str | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Changelog], str | None, bool]:
        """List published changelogs of a project, newest publication first.

        Args:
            project_id: Owning project
            search: Optional case-insensitive substring matched against summary_final
            cursor: Optional cursor for pagination
            limit: Maximum number of results
        """
        query = select(Changelog).where(
            Changelog.project_id == project_id,
            Changelog.status == ChangelogStatus.PUBLISHED.value,
        )
        if search:
            query = query.where(col(Changelog.summary_final).icontains(search, autoescape=True))
        return await self.paginate(query, cursor, limit, Changelog.published_at)

    async def list_for_creator(
        self,
        user_id: UUID,
        status: ChangelogStatus | None = None,
    ) -> list[Changelog]:
        """List changelogs created by a user, most recently generated first."""
        query = select(Changelog).where(Changelog.created_by == user_id)
        if status is not None:
            query = query.where(Changelog.status == status.value)
        query = query.order_by(col(Changelog.generated_at).desc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def last_published_at(self, project_id: UUID) -> datetime | None:
        """Publish time of the project's most recent published changelog."""
        result = await self.session.execute(
            select(func.max(Changelog.published_at)).where(
                Changelog.project_id == project_id,
                Changelog.status == ChangelogStatus.PUBLISHED.value,
            )
        )
        return result.scalar_one_or_none()

    async def delete_for_project(self, project_id: UUID) -> int:
        """Delete every changelog of a project. Returns the number deleted."""
        stmt = delete(Changelog).where(Changelog.project_id == project_id)  # type: ignore[arg-type]
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]
