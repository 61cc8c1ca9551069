"""Developer-facing changelog endpoints. All require a signed-in user."""

from typing import Annotated

from fastapi import APIRouter, Query, Request, status

from src.scribe.api.dependencies import (
    ChangelogServiceDep,
    CurrentUser,
    GenerationServiceDep,
    OwnedChangelog,
)
from src.scribe.core.rate_limit import generate_rate_limit, limiter
from src.scribe.models import ChangelogStatus
from src.scribe.schemas.changelog import (
    ChangelogGenerateRequest,
    ChangelogGenerateResponse,
    ChangelogPublishRequest,
    ChangelogPublishResponse,
    ChangelogRead,
)

router = APIRouter(prefix="/changelogs", tags=["changelogs"])


@router.post(
    "/generate",
    response_model=ChangelogGenerateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate a draft changelog",
    description=(
        "Fetch commits from a GitHub repository and draft a changelog with AI. "
        "The project is created on first use of a repository URL. Without "
        "`commit_count`, commits since the last published changelog are used."
    ),
    responses={
        201: {"description": "Draft created"},
        400: {"description": "Invalid URL or commit count, or no commits found"},
        401: {"description": "Not signed in"},
        403: {"description": "No access to the repository"},
        408: {"description": "AI generation timed out"},
        409: {"description": "Project was created concurrently"},
        422: {"description": "Blocked by AI safety filters"},
        429: {"description": "GitHub or AI rate limit exceeded"},
    },
)
@limiter.limit(generate_rate_limit)
async def generate_changelog(
    request: Request,
    data: ChangelogGenerateRequest,
    user: CurrentUser,
    service: GenerationServiceDep,
) -> ChangelogGenerateResponse:
    return await service.generate(user, data.project_name, data.repo_url, data.commit_count)


@router.post(
    "/{changelog_id}/publish",
    response_model=ChangelogPublishResponse,
    summary="Publish a draft",
    description="Publish a draft with its edited final text. Publishing happens once.",
    responses={
        403: {"description": "Not the changelog creator"},
        404: {"description": "Changelog not found"},
        409: {"description": "Already published"},
    },
)
async def publish_changelog(
    changelog: OwnedChangelog,
    data: ChangelogPublishRequest,
    service: ChangelogServiceDep,
) -> ChangelogPublishResponse:
    published = await service.publish(changelog.id, data.summary_final)
    return ChangelogPublishResponse(
        changelog_id=published.id,
        version=published.version,
        status=published.status,
        published_at=published.published_at,  # type: ignore[arg-type]
        project_id=published.project_id,
    )


@router.delete(
    "/{changelog_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a changelog",
    responses={
        403: {"description": "Not the changelog creator"},
        404: {"description": "Changelog not found"},
    },
)
async def delete_changelog(changelog: OwnedChangelog, service: ChangelogServiceDep) -> None:
    await service.delete(changelog.id)


@router.get(
    "/mine",
    response_model=list[ChangelogRead],
    summary="List my changelogs",
    description="Changelogs created by the current user, newest first.",
)
async def list_my_changelogs(
    user: CurrentUser,
    service: ChangelogServiceDep,
    status_filter: Annotated[ChangelogStatus | None, Query(alias="status")] = None,
) -> list[ChangelogRead]:
    changelogs = await service.list_for_creator(user.id, status_filter)
    return [ChangelogRead.model_validate(c) for c in changelogs]
