"""Changelog generation workflow.

repository access -> project registry -> commit selection -> draft
generation -> draft persistence, as one unit of work.
"""

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from src.scribe.core.exceptions import NoCommitsFound
from src.scribe.core.logging import get_logger
from src.scribe.core.security import normalize_repo_url, validate_commit_count
from src.scribe.core.security.validators import MAX_COMMIT_COUNT
from src.scribe.integrations.github import CommitRecord, GitHubClient
from src.scribe.models import Project, User
from src.scribe.models.base import utc_now
from src.scribe.schemas.changelog import ChangelogGenerateResponse
from src.scribe.services.access_service import AccessService, GitHubClientFactory
from src.scribe.services.changelog_service import ChangelogService
from src.scribe.services.draft_generator import DraftGenerator
from src.scribe.services.project_service import ProjectService

logger = get_logger(__name__)


class GenerationService:
    """Orchestrates a generate request. Nothing is persisted unless every step succeeds."""

    def __init__(
        self,
        project_service: ProjectService,
        changelog_service: ChangelogService,
        access_service: AccessService,
        draft_generator: DraftGenerator,
        github_factory: GitHubClientFactory,
        session: AsyncSession,
        lookback_days: int = 30,
    ):
        self.project_service = project_service
        self.changelog_service = changelog_service
        self.access_service = access_service
        self.draft_generator = draft_generator
        self.github_factory = github_factory
        self.session = session
        self.lookback_days = lookback_days

    async def generate(
        self,
        user: User,
        project_name: str,
        repo_url: str,
        commit_count: int | None = None,
    ) -> ChangelogGenerateResponse:
        """Generate and store a draft changelog for a repository.

        With commit_count, the most recent commit_count commits are used.
        Without it, commits since the project's last published changelog
        (or the last lookback_days days) are used, at most 100.

        Raises:
            InvalidRepositoryUrl, InvalidCommitCount: Before any side effect.
            RepositoryAccessRequired: If GitHub reports no access for the user.
            NoCommitsFound: If the selected range is empty.
            Any adapter or generator error, after rolling back.
        """
        repo_url = normalize_repo_url(repo_url)
        if commit_count is not None:
            validate_commit_count(commit_count)

        await self.access_service.require_repository_access(repo_url, user)

        try:
            project = await self.project_service.resolve_or_create_project(
                project_name, repo_url, user.id
            )
            commits = await self._select_commits(project, commit_count, user)
            if not commits:
                raise NoCommitsFound()

            summary = await self.draft_generator.generate_draft(commits)
            changelog = await self.changelog_service.create_draft(
                project.id, user.id, [c.sha for c in commits], summary
            )
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Changelog generated",
            changelog_id=str(changelog.id),
            project_id=str(project.id),
            commit_count=len(commits),
        )
        return ChangelogGenerateResponse(
            changelog_id=changelog.id,
            summary_ai=changelog.summary_ai,
            version=changelog.version,
            project_id=project.id,
            commit_count=len(commits),
        )

    async def _select_commits(
        self,
        project: Project,
        commit_count: int | None,
        user: User,
    ) -> list[CommitRecord]:
        client: GitHubClient = self.github_factory(user.access_token)
        if commit_count is not None:
            return await client.fetch_recent_commits(project.repo_url, commit_count)

        until = utc_now()
        since = await self.changelog_service.last_published_at(project.id)
        if since is None:
            since = until - timedelta(days=self.lookback_days)
        return await client.fetch_commits_between(
            project.repo_url, since, until, limit=MAX_COMMIT_COUNT
        )
