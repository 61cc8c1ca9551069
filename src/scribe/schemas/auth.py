"""Sign-in and current-user schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class GitHubSignInRequest(BaseModel):
    """An OAuth access token already issued by GitHub."""

    access_token: str = Field(min_length=1, max_length=255)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserRead(BaseModel):
    id: UUID
    github_id: int
    username: str
    email: str | None
    name: str | None
    avatar_url: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class SignInResponse(TokenResponse):
    user: UserRead
