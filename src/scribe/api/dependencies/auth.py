"""Authentication and authorization dependencies."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header

from src.scribe.api.dependencies.services import AccessServiceDep, AuthServiceDep
from src.scribe.core.exceptions import AuthenticationRequired
from src.scribe.core.logging import bind_user_context
from src.scribe.models import Changelog, Project, User


async def require_authenticated(
    service: AuthServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Validate the Bearer token and return the signed-in user."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationRequired("Missing or invalid authorization header")

    user = await service.get_user_from_token(authorization[7:])
    bind_user_context(user.id, user.username)
    return user


CurrentUser = Annotated[User, Depends(require_authenticated)]


async def require_project_ownership(
    project_id: UUID,
    user: CurrentUser,
    access: AccessServiceDep,
) -> Project:
    return await access.require_project_ownership(project_id, user.id)


async def require_changelog_ownership(
    changelog_id: UUID,
    user: CurrentUser,
    access: AccessServiceDep,
) -> Changelog:
    return await access.require_changelog_ownership(changelog_id, user.id)


OwnedProject = Annotated[Project, Depends(require_project_ownership)]
OwnedChangelog = Annotated[Changelog, Depends(require_changelog_ownership)]
