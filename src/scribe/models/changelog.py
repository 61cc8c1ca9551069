"""Changelog model - an AI draft and, once published, its final text."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, Text
from sqlmodel import Field, SQLModel

from src.scribe.models.base import utc_now
from src.scribe.models.enums import ChangelogStatus

VERSION_FORMAT = "%Y.%m.%d-%H%M"


def version_for(moment: datetime) -> str:
    """Format a timestamp as a changelog version, e.g. 2024.03.15-1430."""
    return moment.strftime(VERSION_FORMAT)


class Changelog(SQLModel, table=True):
    """Changelog generated for a project.

    Invariant: status is published iff published_at and summary_final are set.
    """

    __tablename__ = "changelogs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    # No FK: the project service deletes changelogs explicitly
    project_id: UUID = Field(index=True)
    created_by: UUID | None = Field(default=None, index=True)
    version: str = Field(max_length=20)
    # Unbounded: model output is never truncated
    summary_ai: str = Field(sa_column=Column(Text, nullable=False))
    summary_final: str | None = Field(default=None, max_length=10000)
    commit_hashes: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    generated_at: datetime = Field(default_factory=utc_now)
    published_at: datetime | None = Field(default=None, index=True)
    status: str = Field(default=ChangelogStatus.DRAFT.value, max_length=20, index=True)

    @property
    def is_published(self) -> bool:
        return self.status == ChangelogStatus.PUBLISHED.value
