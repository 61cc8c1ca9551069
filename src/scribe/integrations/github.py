"""GitHub REST API client.

Every failure is classified here into a ScribeError subclass, so callers
never inspect HTTP status codes or response bodies themselves.
"""

from datetime import UTC, datetime
from typing import Any, Self

import httpx
from pydantic import BaseModel, ValidationError, field_validator

from src.scribe.core.config import get_settings
from src.scribe.core.exceptions import (
    AccessDenied,
    RateLimited,
    RepositoryNotFound,
    UpstreamError,
)
from src.scribe.core.logging import get_logger
from src.scribe.core.security.validators import (
    MAX_COMMIT_COUNT,
    is_commit_hash,
    parse_repo_url,
    validate_commit_count,
)

logger = get_logger(__name__)

GITHUB_ACCEPT = "application/vnd.github+json"


class CommitRecord(BaseModel):
    """A commit normalized from the GitHub commits API."""

    sha: str
    message: str
    author_name: str
    author_email: str
    timestamp: str  # ISO-8601, as returned by GitHub

    @field_validator("sha")
    @classmethod
    def validate_sha(cls, v: str) -> str:
        if not is_commit_hash(v):
            raise ValueError("Commit sha must be 40 hexadecimal characters")
        return v.lower()

    @field_validator("timestamp")
    @classmethod
    def validate_timestamp(cls, v: str) -> str:
        if v:
            datetime.fromisoformat(v)
        return v

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> Self:
        commit = item["commit"]
        author = commit.get("author") or {}
        return cls(
            sha=item["sha"],
            message=commit["message"],
            author_name=author.get("name") or "",
            author_email=author.get("email") or "",
            timestamp=author.get("date") or "",
        )

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def committed_at(self) -> datetime | None:
        """Timestamp as an aware UTC datetime, or None if GitHub sent none."""
        if not self.timestamp:
            return None
        return _as_utc(datetime.fromisoformat(self.timestamp))


class RepositoryAccess(BaseModel):
    can_access: bool
    is_owner: bool = False
    has_write_access: bool = False


class GitHubUser(BaseModel):
    id: int
    login: str
    name: str | None = None
    email: str | None = None
    avatar_url: str | None = None


def _as_utc(moment: datetime) -> datetime:
    """Naive datetimes are UTC by convention; make them aware."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def _iso(moment: datetime) -> str:
    return _as_utc(moment).strftime("%Y-%m-%dT%H:%M:%SZ")


def _is_rate_limited(response: httpx.Response) -> bool:
    if response.status_code == 429:
        return True
    return (
        response.status_code == 403
        and response.headers.get("x-ratelimit-remaining") == "0"
    )


def _raise_for_status(response: httpx.Response, target: str) -> None:
    """Translate a non-2xx GitHub response into a domain error."""
    if response.is_success:
        return
    status_code = response.status_code
    logger.warning("GitHub request failed", target=target, status_code=status_code)
    if status_code == 404:
        raise RepositoryNotFound()
    # Rate limiting is signalled with 403 too, so check it first
    if _is_rate_limited(response):
        raise RateLimited()
    if status_code in (401, 403):
        raise AccessDenied()
    raise UpstreamError(f"GitHub API error ({status_code})")


def _is_empty_repository(response: httpx.Response) -> bool:
    """GitHub answers 409 when listing commits of a repository with none."""
    return response.status_code == 409


def _parse_commits(response: httpx.Response) -> list[CommitRecord]:
    try:
        payload = response.json()
        if not isinstance(payload, list):
            raise TypeError("Expected a list of commits")
        return [CommitRecord.from_api(item) for item in payload]
    except (ValueError, TypeError, KeyError, ValidationError) as e:
        logger.warning("Malformed GitHub commits payload", error=str(e))
        raise UpstreamError("GitHub returned a malformed commit list") from e


class GitHubClient:
    """Thin async client over the endpoints Scribe needs.

    Args:
        token: OAuth or personal access token sent as a Bearer credential.
        base_url: API root, normally https://api.github.com.
        user_agent: Sent on every request; GitHub rejects requests without one.
        timeout: Seconds per request, or None to wait indefinitely.
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self,
        token: str | None,
        *,
        base_url: str = "https://api.github.com",
        user_agent: str = "Scribe-Changelog-Generator",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.headers = {"Accept": GITHUB_ACCEPT, "User-Agent": user_agent}
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    @classmethod
    def for_token(cls, token: str | None) -> Self:
        """Build a client from settings, falling back to GITHUB_PAT when token is None."""
        settings = get_settings()
        return cls(
            token or settings.github_pat,
            base_url=settings.github_api_url,
            user_agent=settings.github_user_agent,
            timeout=settings.github_request_timeout_seconds,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            transport=self.transport,
        )

    async def _get(
        self,
        client: httpx.AsyncClient,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        try:
            return await client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.warning("GitHub request error", path=path, error=str(e))
            raise UpstreamError("Could not reach GitHub") from e

    async def fetch_recent_commits(self, repo_url: str, count: int) -> list[CommitRecord]:
        """Fetch the `count` most recent commits, newest first.

        Raises:
            InvalidCommitCount: If count is outside [1, 100]; no request is made.
            InvalidRepositoryUrl: If repo_url is not a GitHub repository URL.
            RepositoryNotFound, AccessDenied, RateLimited, UpstreamError
        """
        validate_commit_count(count)
        owner, repo = parse_repo_url(repo_url)
        path = f"/repos/{owner}/{repo}/commits"
        per_page = min(count, MAX_COMMIT_COUNT)

        commits: list[CommitRecord] = []
        page = 1
        async with self._client() as client:
            while len(commits) < count:
                response = await self._get(client, path, {"per_page": per_page, "page": page})
                if _is_empty_repository(response):
                    logger.info("Repository has no commits", repo=f"{owner}/{repo}")
                    break
                _raise_for_status(response, f"{owner}/{repo}")
                batch = _parse_commits(response)
                commits.extend(batch)
                if len(batch) < per_page:
                    break
                page += 1

        logger.info("Fetched commits", repo=f"{owner}/{repo}", count=min(len(commits), count))
        return commits[:count]

    async def fetch_commits_between(
        self,
        repo_url: str,
        since: datetime,
        until: datetime,
        limit: int = MAX_COMMIT_COUNT,
    ) -> list[CommitRecord]:
        """Fetch commits authored in [since, until], newest first, at most `limit`.

        Naive datetimes are treated as UTC.
        """
        validate_commit_count(limit)
        owner, repo = parse_repo_url(repo_url)
        path = f"/repos/{owner}/{repo}/commits"
        since, until = _as_utc(since), _as_utc(until)

        commits: list[CommitRecord] = []
        page = 1
        async with self._client() as client:
            while len(commits) < limit:
                params = {
                    "since": _iso(since),
                    "until": _iso(until),
                    "per_page": MAX_COMMIT_COUNT,
                    "page": page,
                }
                response = await self._get(client, path, params)
                if _is_empty_repository(response):
                    logger.info("Repository has no commits", repo=f"{owner}/{repo}")
                    break
                _raise_for_status(response, f"{owner}/{repo}")
                batch = _parse_commits(response)
                # GitHub filters by committer date; keep authored-in-range only
                commits.extend(
                    c
                    for c in batch
                    if c.committed_at is None or since <= c.committed_at <= until
                )
                if len(batch) < MAX_COMMIT_COUNT:
                    break
                page += 1

        logger.info(
            "Fetched commits in window",
            repo=f"{owner}/{repo}",
            since=_iso(since),
            count=min(len(commits), limit),
        )
        return commits[:limit]

    async def get_repository_access(self, owner: str, repo: str, login: str) -> RepositoryAccess:
        """Ask GitHub what the token's user may do on owner/repo.

        A repository that is missing or hidden from the user yields
        can_access=False rather than an error. Rate limiting and other
        failures still raise.
        """
        async with self._client() as client:
            response = await self._get(client, f"/repos/{owner}/{repo}")

        if _is_rate_limited(response):
            raise RateLimited()
        if response.status_code in (401, 403, 404):
            return RepositoryAccess(can_access=False)
        _raise_for_status(response, f"{owner}/{repo}")

        try:
            permissions = response.json().get("permissions") or {}
        except (ValueError, AttributeError) as e:
            raise UpstreamError("GitHub returned a malformed repository") from e

        admin = bool(permissions.get("admin"))
        return RepositoryAccess(
            can_access=True,
            is_owner=login.lower() == owner.lower() or admin,
            has_write_access=admin
            or bool(permissions.get("maintain"))
            or bool(permissions.get("push")),
        )

    async def get_authenticated_user(self) -> GitHubUser:
        """Profile of the user the token belongs to.

        Raises:
            AccessDenied: If GitHub rejects the token.
        """
        async with self._client() as client:
            response = await self._get(client, "/user")

        if response.status_code == 404:
            raise AccessDenied()
        _raise_for_status(response, "user")
        try:
            return GitHubUser.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise UpstreamError("GitHub returned a malformed user profile") from e
