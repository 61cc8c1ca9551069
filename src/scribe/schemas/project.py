"""Project schemas for API responses."""

from datetime import datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel, model_validator

from src.scribe.core.security import parse_repo_url


class ProjectRead(BaseModel):
    """Schema for reading a project.

    Older rows may lack the owner/repo fields; they are derived from
    `repo_url` on the way out.
    """

    id: UUID
    name: str
    repo_url: str
    description: str | None
    owner_id: UUID | None
    github_repo_owner: str | None
    github_repo_name: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @model_validator(mode="after")
    def fill_repo_coordinates(self) -> Self:
        if not self.github_repo_owner or not self.github_repo_name:
            self.github_repo_owner, self.github_repo_name = parse_repo_url(self.repo_url)
        return self
