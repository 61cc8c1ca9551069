"""Changelog schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ChangelogGenerateRequest(BaseModel):
    """Request to draft a changelog from a repository's commits.

    Without `commit_count`, commits since the project's last published
    changelog are used instead.
    """

    project_name: str = Field(min_length=1, max_length=200)
    repo_url: str = Field(min_length=1, max_length=500)
    commit_count: int | None = None

    @field_validator("project_name", "repo_url")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Value cannot be empty or whitespace only")
        return v


class ChangelogGenerateResponse(BaseModel):
    changelog_id: UUID
    summary_ai: str
    version: str
    project_id: UUID
    commit_count: int


class ChangelogPublishRequest(BaseModel):
    summary_final: str = Field(min_length=1, max_length=10000)

    @field_validator("summary_final")
    @classmethod
    def validate_summary(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Final summary cannot be empty or whitespace only")
        return v


class ChangelogPublishResponse(BaseModel):
    changelog_id: UUID
    version: str
    status: str
    published_at: datetime
    project_id: UUID


class ChangelogRead(BaseModel):
    """Full changelog, as seen by its creator."""

    id: UUID
    project_id: UUID
    created_by: UUID | None
    version: str
    summary_ai: str
    summary_final: str | None
    commit_hashes: list[str]
    generated_at: datetime
    published_at: datetime | None
    status: str

    model_config = {"from_attributes": True}


class PublishedChangelogRead(BaseModel):
    """Public view of a published changelog. The AI draft is not exposed."""

    id: UUID
    project_id: UUID
    version: str
    summary_final: str
    commit_hashes: list[str]
    published_at: datetime

    model_config = {"from_attributes": True}
