"""Project model - one row per GitHub repository."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.scribe.core.security.validators import parse_repo_url
from src.scribe.models.base import utc_now


class Project(SQLModel, table=True):
    """A GitHub repository registered with Scribe.

    `github_repo_owner` and `github_repo_name` may be missing on older rows;
    read them through `repo_coordinates`, which falls back to parsing
    `repo_url`.
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200, index=True)
    repo_url: str = Field(max_length=500, unique=True, index=True)
    description: str | None = Field(default=None, max_length=500)
    owner_id: UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL", index=True
    )
    github_repo_owner: str | None = Field(default=None, max_length=100)
    github_repo_name: str | None = Field(default=None, max_length=100)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, index=True)

    @property
    def repo_coordinates(self) -> tuple[str, str]:
        """(owner, repo) of the underlying GitHub repository."""
        if self.github_repo_owner and self.github_repo_name:
            return self.github_repo_owner, self.github_repo_name
        return parse_repo_url(self.repo_url)
