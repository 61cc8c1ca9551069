"""Property-based tests for validators using hypothesis."""

import re
from datetime import UTC, datetime

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from src.scribe.core.exceptions import InvalidCommitCount, InvalidRepositoryUrl
from src.scribe.core.security import (
    is_commit_hash,
    normalize_repo_url,
    parse_repo_url,
    validate_commit_count,
)
from src.scribe.models import version_for

pytestmark = pytest.mark.unit


# Owner and repository segments: letters, digits, underscore, dot, hyphen, not only dots
segment = st.from_regex(r"[a-zA-Z0-9_.-]{1,39}", fullmatch=True).filter(
    lambda s: set(s) != {"."}
)

VERSION_PATTERN = re.compile(r"^\d{4}\.\d{2}\.\d{2}-\d{4}$")


@given(owner=segment, repo=segment)
@settings(max_examples=100)
def test_trailing_slash_normalizes_to_same_url(owner: str, repo: str):
    """A repository URL with and without a trailing slash normalize identically."""
    bare = f"https://github.com/{owner}/{repo}"
    assert normalize_repo_url(bare) == bare
    assert normalize_repo_url(bare + "/") == bare


@given(owner=segment, repo=segment)
@settings(max_examples=100)
def test_parse_extracts_owner_and_repo(owner: str, repo: str):
    """parse_repo_url returns the two path segments unchanged."""
    assert parse_repo_url(f"https://github.com/{owner}/{repo}") == (owner, repo)


@given(count=st.integers(min_value=1, max_value=100))
def test_counts_in_range_accepted(count: int):
    """Every count in [1, 100] passes validation."""
    assert validate_commit_count(count) == count


@given(count=st.one_of(st.integers(max_value=0), st.integers(min_value=101)))
def test_counts_out_of_range_rejected(count: int):
    """Every count outside [1, 100] is rejected."""
    with pytest.raises(InvalidCommitCount):
        validate_commit_count(count)


@given(
    moment=st.datetimes(
        min_value=datetime(2000, 1, 1),
        max_value=datetime(2999, 12, 31, 23, 59),
    )
)
def test_version_format(moment: datetime):
    """Versions always look like YYYY.MM.DD-HHMM."""
    assert VERSION_PATTERN.match(version_for(moment))


@given(sha=st.from_regex(r"[0-9a-f]{40}", fullmatch=True))
def test_full_hex_shas_are_commit_hashes(sha: str):
    assert is_commit_hash(sha)
    assert is_commit_hash(sha.upper())


class TestRepoUrlEdgeCases:
    """Specific edge cases for repository URL validation."""

    @pytest.mark.parametrize(
        "url",
        [
            "http://github.com/acme/widgets",
            "https://gitlab.com/acme/widgets",
            "https://github.com/acme",
            "https://github.com/acme/widgets/tree/main",
            "https://github.com/acme/wid gets",
            "https://github.com/acme/widgets\n",
            "https://github.com/acme/..",
            "https://github.com/acme/./",
            "https://github.com/../widgets",
            "not a url",
            "",
        ],
    )
    def test_invalid_urls_rejected(self, url: str):
        with pytest.raises(InvalidRepositoryUrl):
            normalize_repo_url(url)

    def test_invalid_url_rejected_by_parse(self):
        with pytest.raises(InvalidRepositoryUrl):
            parse_repo_url("https://github.com/acme/widgets/issues")

    def test_dotted_and_hyphenated_names_accepted(self):
        assert parse_repo_url("https://github.com/my-org/my.repo_v2/") == ("my-org", "my.repo_v2")

    def test_dot_only_segments_rejected_by_parse(self):
        with pytest.raises(InvalidRepositoryUrl):
            parse_repo_url("https://github.com/acme/..")

    def test_names_with_leading_dots_accepted(self):
        assert parse_repo_url("https://github.com/acme/.github") == ("acme", ".github")

    def test_error_message_names_the_problem(self):
        with pytest.raises(InvalidRepositoryUrl) as exc_info:
            normalize_repo_url("ftp://example.com")
        assert exc_info.value.message == "Invalid GitHub repository URL format"


class TestCommitCountEdgeCases:
    """Boundaries of the commit count range."""

    @pytest.mark.parametrize("count", [1, 100])
    def test_bounds_accepted(self, count: int):
        assert validate_commit_count(count) == count

    @pytest.mark.parametrize("count", [0, 101, -5])
    def test_just_outside_bounds_rejected(self, count: int):
        with pytest.raises(InvalidCommitCount) as exc_info:
            validate_commit_count(count)
        assert str(count) in exc_info.value.message


class TestCommitHashEdgeCases:
    @pytest.mark.parametrize(
        "value",
        ["abc1234", "g" * 40, "a" * 39, "a" * 41, "", "a" * 40 + "\n"],
    )
    def test_non_hashes_rejected(self, value: str):
        assert not is_commit_hash(value)


class TestVersionFor:
    def test_known_moment(self):
        assert version_for(datetime(2024, 3, 5, 9, 7, 59)) == "2024.03.05-0907"

    def test_aware_moment_uses_its_own_clock(self):
        assert version_for(datetime(2024, 12, 31, 23, 59, tzinfo=UTC)) == "2024.12.31-2359"
