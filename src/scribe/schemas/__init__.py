from src.scribe.schemas.auth import (
    GitHubSignInRequest,
    SignInResponse,
    TokenResponse,
    UserRead,
)
from src.scribe.schemas.changelog import (
    ChangelogGenerateRequest,
    ChangelogGenerateResponse,
    ChangelogPublishRequest,
    ChangelogPublishResponse,
    ChangelogRead,
    PublishedChangelogRead,
)
from src.scribe.schemas.pagination import PaginatedResponse
from src.scribe.schemas.project import ProjectRead

__all__ = [
    # Auth
    "GitHubSignInRequest",
    "SignInResponse",
    "TokenResponse",
    "UserRead",
    # Changelog
    "ChangelogGenerateRequest",
    "ChangelogGenerateResponse",
    "ChangelogPublishRequest",
    "ChangelogPublishResponse",
    "ChangelogRead",
    "PublishedChangelogRead",
    # Pagination
    "PaginatedResponse",
    # Project
    "ProjectRead",
]
