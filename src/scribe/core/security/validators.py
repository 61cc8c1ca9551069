"""Input validators for repository URLs, commit hashes and commit counts."""

import re
from typing import Final

from src.scribe.core.exceptions import InvalidCommitCount, InvalidRepositoryUrl

MIN_COMMIT_COUNT: Final[int] = 1
MAX_COMMIT_COUNT: Final[int] = 100  # GitHub's max page size

REPO_URL_REGEX: Final[str] = r"^https://github\.com/([a-zA-Z0-9_.-]+)/([a-zA-Z0-9_.-]+)/?$"
COMMIT_HASH_REGEX: Final[str] = r"^[0-9a-f]{40}$"

REPO_URL_PATTERN: Final[re.Pattern[str]] = re.compile(REPO_URL_REGEX)
COMMIT_HASH_PATTERN: Final[re.Pattern[str]] = re.compile(COMMIT_HASH_REGEX, re.IGNORECASE)


def _match_repo_url(repo_url: str) -> re.Match[str] | None:
    match = REPO_URL_PATTERN.fullmatch(repo_url)
    # "." and ".." are path traversal, not names
    if match is None or any(set(part) == {"."} for part in match.groups()):
        return None
    return match


def normalize_repo_url(repo_url: str) -> str:
    """Validate a GitHub repository URL and strip its trailing slash.

    `https://github.com/acme/widgets/` and `https://github.com/acme/widgets`
    normalize to the same value.

    Raises:
        InvalidRepositoryUrl: If the URL is not `https://github.com/<owner>/<repo>`.
    """
    if _match_repo_url(repo_url) is None:
        raise InvalidRepositoryUrl()
    return repo_url.removesuffix("/")


def parse_repo_url(repo_url: str) -> tuple[str, str]:
    """Extract (owner, repo) from a GitHub repository URL.

    Raises:
        InvalidRepositoryUrl: If the URL does not match the repository pattern.
    """
    match = _match_repo_url(repo_url)
    if match is None:
        raise InvalidRepositoryUrl()
    return match.group(1), match.group(2)


def validate_commit_count(count: int) -> int:
    """Ensure a commit count lies within [1, 100]."""
    if not MIN_COMMIT_COUNT <= count <= MAX_COMMIT_COUNT:
        raise InvalidCommitCount(
            f"Commit count must be between {MIN_COMMIT_COUNT} and {MAX_COMMIT_COUNT}, "
            f"got {count}"
        )
    return count


def is_commit_hash(value: str) -> bool:
    """True for a full 40-character hexadecimal commit SHA."""
    return COMMIT_HASH_PATTERN.fullmatch(value) is not None
