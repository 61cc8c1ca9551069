"""Project endpoints.

Listing and reading are public; deleting requires project ownership.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.scribe.api.dependencies import (
    ChangelogServiceDep,
    OwnedProject,
    ProjectServiceDep,
)
from src.scribe.schemas.changelog import PublishedChangelogRead
from src.scribe.schemas.pagination import PaginatedResponse
from src.scribe.schemas.project import ProjectRead

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=PaginatedResponse[ProjectRead],
    summary="List projects",
    description="List all projects, most recently updated first, with cursor-based pagination.",
)
async def list_projects(
    service: ProjectServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[ProjectRead]:
    projects, next_cursor, has_more = await service.list_projects(cursor, limit)
    return PaginatedResponse(
        items=[ProjectRead.model_validate(p) for p in projects],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={404: {"description": "Project not found"}},
)
async def get_project(project_id: UUID, service: ProjectServiceDep) -> ProjectRead:
    return ProjectRead.model_validate(await service.get_project(project_id))


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Delete a project and all of its changelogs. Only the project owner may do this.",
    responses={
        204: {"description": "Project and changelogs deleted"},
        403: {"description": "Not the project owner"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(project: OwnedProject, service: ProjectServiceDep) -> None:
    await service.delete_project(project)


@router.get(
    "/{project_id}/changelogs",
    response_model=PaginatedResponse[PublishedChangelogRead],
    summary="List published changelogs",
    description=(
        "Published changelogs of a project, newest first. "
        "`search` matches the final text case-insensitively."
    ),
    responses={404: {"description": "Project not found"}},
)
async def list_published_changelogs(
    project_id: UUID,
    project_service: ProjectServiceDep,
    changelog_service: ChangelogServiceDep,
    search: Annotated[str | None, Query(max_length=200, description="Text to search for")] = None,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[PublishedChangelogRead]:
    await project_service.get_project(project_id)
    changelogs, next_cursor, has_more = await changelog_service.list_published(
        project_id, search, cursor, limit
    )
    return PaginatedResponse(
        items=[PublishedChangelogRead.model_validate(c) for c in changelogs],
        next_cursor=next_cursor,
        has_more=has_more,
    )
