"""Project and changelog factories for test data generation."""

from datetime import timedelta
from uuid import uuid4

from polyfactory import Use

from src.scribe.models import Changelog, ChangelogStatus, Project, version_for
from tests.factories.base import BaseFactory, commit_sha, utc_now


class ProjectFactory(BaseFactory):
    """Factory for generating Project test data."""

    __model__ = Project

    id = Use(uuid4)
    name = Use(lambda: f"Project {uuid4().hex[-6:]}")
    repo_url = Use(lambda: f"https://github.com/acme/repo-{uuid4().hex[-8:]}")
    description = None
    owner_id = None
    github_repo_owner = None
    github_repo_name = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def for_url(cls, repo_url: str, **kwargs) -> Project:
        """Create a project with owner/repo fields derived from repo_url."""
        owner, repo = repo_url.removesuffix("/").split("/")[-2:]
        return cls.build(
            repo_url=repo_url,
            github_repo_owner=owner,
            github_repo_name=repo,
            **kwargs,
        )


class ChangelogFactory(BaseFactory):
    """Factory for generating draft Changelog test data."""

    __model__ = Changelog

    id = Use(uuid4)
    project_id = Use(uuid4)
    created_by = None
    version = Use(lambda: version_for(utc_now()))
    summary_ai = "## Features\n- Add widgets"
    summary_final = None
    commit_hashes = Use(lambda: [commit_sha(1), commit_sha(2)])
    generated_at = Use(utc_now)
    published_at = None
    status = ChangelogStatus.DRAFT.value

    @classmethod
    def published(cls, summary_final: str = "Added widgets", **kwargs) -> Changelog:
        """Create a changelog that has already been published."""
        published_at = kwargs.pop("published_at", utc_now() - timedelta(days=1))
        return cls.build(
            summary_final=summary_final,
            published_at=published_at,
            status=ChangelogStatus.PUBLISHED.value,
            **kwargs,
        )
