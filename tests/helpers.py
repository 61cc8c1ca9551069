"""Test helper functions for common data creation patterns."""

from datetime import timedelta

from src.scribe.core.security import create_access_token
from src.scribe.models import Changelog, Project, User
from tests.factories import ChangelogFactory, ProjectFactory, UserFactory
from tests.fakes import InMemoryStore


def auth_headers(user: User) -> dict[str, str]:
    """Authorization header carrying a fresh access token for user."""
    return {"Authorization": f"Bearer {create_access_token(user.id, user.username)}"}


def create_signed_in_user(store: InMemoryStore, **user_kwargs) -> tuple[User, dict[str, str]]:
    """Create a user and an Authorization header for them.

    Returns:
        Tuple of (user, headers)
    """
    user = UserFactory.build(**user_kwargs)
    store.save(user)
    return user, auth_headers(user)


def create_project_with_changelogs(
    store: InMemoryStore,
    owner: User | None = None,
    repo_url: str = "https://github.com/acme/widgets",
    published: tuple[str, ...] = (),
    drafts: int = 0,
) -> tuple[Project, list[Changelog]]:
    """Create a project plus published changelogs (one per text) and drafts.

    Published changelogs are one day apart, the first text being the newest.

    Returns:
        Tuple of (project, changelogs)
    """
    project = ProjectFactory.for_url(repo_url, owner_id=owner.id if owner else None)
    store.save(project)

    creator = owner.id if owner else None
    changelogs: list[Changelog] = []
    for offset, text in enumerate(published):
        changelogs.append(
            ChangelogFactory.published(
                text,
                project_id=project.id,
                created_by=creator,
                published_at=project.created_at - timedelta(days=offset),
            )
        )
    changelogs.extend(
        ChangelogFactory.build(project_id=project.id, created_by=creator) for _ in range(drafts)
    )
    for changelog in changelogs:
        store.save(changelog)
    return project, changelogs
