"""Tests for the project registry (ProjectService)."""

from uuid import uuid4

import pytest

from src.scribe.core.exceptions import DuplicateRepository, InvalidRepositoryUrl, NotFound
from tests.factories import ChangelogFactory, ProjectFactory, UserFactory

pytestmark = pytest.mark.unit

REPO_URL = "https://github.com/acme/widgets"


class TestResolveOrCreateProject:
    """Tests for ProjectService.resolve_or_create_project."""

    async def test_creates_project_on_first_use(self, project_service, store, session):
        owner = UserFactory.build()

        project = await project_service.resolve_or_create_project("Widgets", REPO_URL, owner.id)

        assert project.name == "Widgets"
        assert project.repo_url == REPO_URL
        assert project.owner_id == owner.id
        assert (project.github_repo_owner, project.github_repo_name) == ("acme", "widgets")
        assert store.projects[project.id] is project
        assert session.flushes == 1
        # The caller's unit of work commits
        assert session.commits == 0

    async def test_second_call_returns_same_project(self, project_service, store):
        first = await project_service.resolve_or_create_project("Widgets", REPO_URL, None)
        second = await project_service.resolve_or_create_project("Renamed", REPO_URL + "/", None)

        assert second.id == first.id
        assert second.name == "Widgets"
        assert len(store.projects) == 1

    async def test_fills_missing_owner(self, project_service, store, session):
        project = ProjectFactory.for_url(REPO_URL)
        store.save(project)
        user = UserFactory.build()

        resolved = await project_service.resolve_or_create_project("Widgets", REPO_URL, user.id)

        assert resolved.id == project.id
        assert resolved.owner_id == user.id
        assert session.flushes == 1

    async def test_keeps_existing_owner(self, project_service, store, session):
        original_owner = uuid4()
        project = ProjectFactory.for_url(REPO_URL, owner_id=original_owner)
        store.save(project)

        resolved = await project_service.resolve_or_create_project("Widgets", REPO_URL, uuid4())

        assert resolved.owner_id == original_owner
        assert session.flushes == 0

    async def test_backfills_repo_coordinates(self, project_service, store):
        project = ProjectFactory.build(repo_url=REPO_URL, owner_id=uuid4())
        store.save(project)

        resolved = await project_service.resolve_or_create_project("Widgets", REPO_URL, None)

        assert resolved.github_repo_owner == "acme"
        assert resolved.github_repo_name == "widgets"

    async def test_invalid_url_creates_nothing(self, project_service, store):
        with pytest.raises(InvalidRepositoryUrl):
            await project_service.resolve_or_create_project("Bad", "https://example.com/x", None)

        assert store.projects == {}

    async def test_lost_race_raises_duplicate(self, project_service, store, session):
        session.fail_next_flush_with_duplicate()

        with pytest.raises(DuplicateRepository):
            await project_service.resolve_or_create_project("Widgets", REPO_URL, None)

        assert session.rollbacks == 1
        assert store.projects == {}


class TestGetProject:
    async def test_returns_project(self, project_service, store):
        project = ProjectFactory.for_url(REPO_URL)
        store.save(project)

        assert await project_service.get_project(project.id) is project

    async def test_missing_project_raises_not_found(self, project_service):
        with pytest.raises(NotFound):
            await project_service.get_project(uuid4())


class TestDeleteProject:
    """Deleting a project removes every changelog that belongs to it."""

    async def test_deletes_project_and_its_changelogs(self, project_service, store, session):
        project = ProjectFactory.for_url(REPO_URL)
        other = ProjectFactory.for_url("https://github.com/acme/gadgets")
        store.save(project)
        store.save(other)
        store.save(ChangelogFactory.build(project_id=project.id))
        store.save(ChangelogFactory.published(project_id=project.id))
        kept = ChangelogFactory.build(project_id=other.id)
        store.save(kept)

        deleted = await project_service.delete_project(project)

        assert deleted == 2
        assert project.id not in store.projects
        assert list(store.changelogs) == [kept.id]
        assert session.commits == 1
