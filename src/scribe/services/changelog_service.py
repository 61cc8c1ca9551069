"""Changelog lifecycle - draft creation, publishing and deletion."""

from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.scribe.core.exceptions import AlreadyPublished, InvalidRequest, NotFound
from src.scribe.core.logging import get_logger
from src.scribe.core.security import is_commit_hash
from src.scribe.models import Changelog, ChangelogStatus, version_for
from src.scribe.models.base import utc_now
from src.scribe.repositories import ChangelogRepository, ProjectRepository

logger = get_logger(__name__)


class ChangelogService:
    """Owns the draft -> published transition. There is no way back to draft."""

    def __init__(
        self,
        changelog_repo: ChangelogRepository,
        project_repo: ProjectRepository,
        session: AsyncSession,
    ):
        self.changelog_repo = changelog_repo
        self.project_repo = project_repo
        self.session = session

    async def get_changelog(self, changelog_id: UUID) -> Changelog:
        """Raises NotFound if the changelog does not exist."""
        changelog = await self.changelog_repo.get_by_id(changelog_id)
        if changelog is None:
            raise NotFound("Changelog not found")
        return changelog

    async def create_draft(
        self,
        project_id: UUID,
        creator_id: UUID | None,
        commit_hashes: list[str],
        ai_text: str,
    ) -> Changelog:
        """Persist a freshly generated draft and commit the unit of work.

        The version is derived from the current UTC minute, so two drafts
        created in the same minute share a version.
        """
        if not all(is_commit_hash(sha) for sha in commit_hashes):
            raise InvalidRequest("Commit hashes must be 40 hexadecimal characters")

        now = utc_now()
        changelog = Changelog(
            project_id=project_id,
            created_by=creator_id,
            version=version_for(now),
            summary_ai=ai_text,
            commit_hashes=list(commit_hashes),
            generated_at=now,
            status=ChangelogStatus.DRAFT.value,
        )
        self.changelog_repo.add(changelog)
        await self.project_repo.touch(project_id, now)
        await self.session.commit()
        await self.session.refresh(changelog)

        logger.info(
            "Draft created",
            changelog_id=str(changelog.id),
            project_id=str(project_id),
            version=changelog.version,
            commit_count=len(commit_hashes),
        )
        return changelog

    async def publish(self, changelog_id: UUID, final_text: str) -> Changelog:
        """Publish a draft with its user-edited text.

        Raises:
            NotFound: If the changelog does not exist.
            AlreadyPublished: If it was published before. Publishing is not idempotent.
        """
        changelog = await self.get_changelog(changelog_id)
        if changelog.is_published:
            raise AlreadyPublished()

        now = utc_now()
        # A concurrent publish may have won since the read above
        if not await self.changelog_repo.mark_published(changelog_id, final_text, now):
            raise AlreadyPublished()

        await self.project_repo.touch(changelog.project_id, now)
        await self.session.commit()
        await self.session.refresh(changelog)

        logger.info(
            "Changelog published",
            changelog_id=str(changelog.id),
            project_id=str(changelog.project_id),
            version=changelog.version,
        )
        return changelog

    async def delete(self, changelog_id: UUID) -> None:
        """Hard delete. Raises NotFound if the changelog does not exist."""
        changelog = await self.get_changelog(changelog_id)
        await self.changelog_repo.delete(changelog)
        await self.session.commit()
        logger.info("Changelog deleted", changelog_id=str(changelog_id))

    async def list_published(
        self,
        project_id: UUID,
        search: str | None,
        cursor: str | None,
        limit: int,
    ) -> tuple[list[Changelog], str | None, bool]:
        """Published changelogs of a project, newest publication first."""
        search = search.strip() if search else None
        return await self.changelog_repo.list_published(project_id, search or None, cursor, limit)

    async def list_for_creator(
        self, user_id: UUID, status: ChangelogStatus | None = None
    ) -> list[Changelog]:
        return await self.changelog_repo.list_for_creator(user_id, status)

    async def last_published_at(self, project_id: UUID) -> datetime | None:
        return await self.changelog_repo.last_published_at(project_id)
