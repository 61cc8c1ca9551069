"""User model - a developer signed in through GitHub."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import BigInteger
from sqlmodel import Field, SQLModel

from src.scribe.models.base import utc_now


class User(SQLModel, table=True):
    """GitHub identity plus the OAuth token used for repository calls."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    github_id: int = Field(sa_type=BigInteger, unique=True, index=True)
    username: str = Field(max_length=100, index=True)
    email: str | None = Field(default=None, max_length=255)
    name: str | None = Field(default=None, max_length=255)
    avatar_url: str | None = Field(default=None, max_length=500)
    access_token: str | None = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
