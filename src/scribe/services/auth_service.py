"""Sign-in with a GitHub OAuth token and session token validation."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.scribe.core.exceptions import AccessDenied, AuthenticationRequired
from src.scribe.core.logging import get_logger
from src.scribe.core.security import TokenType, create_access_token, decode_token
from src.scribe.models import User
from src.scribe.models.base import utc_now
from src.scribe.repositories import UserRepository
from src.scribe.services.access_service import GitHubClientFactory

logger = get_logger(__name__)


class AuthService:
    """Authentication service - business logic only."""

    def __init__(
        self,
        user_repo: UserRepository,
        session: AsyncSession,
        github_factory: GitHubClientFactory,
    ):
        self.user_repo = user_repo
        self.session = session
        self.github_factory = github_factory

    async def sign_in_with_github(self, github_token: str) -> tuple[User, str]:
        """Exchange a GitHub OAuth token for a Scribe access token.

        The user is found by GitHub id or created. Profile fields and the
        stored GitHub token are overwritten with the latest values.

        Returns:
            Tuple of (user, access_token)

        Raises:
            AuthenticationRequired: If GitHub rejects the token.
        """
        client = self.github_factory(github_token)
        try:
            profile = await client.get_authenticated_user()
        except AccessDenied as e:
            raise AuthenticationRequired("Invalid GitHub access token") from e

        user = await self.user_repo.get_by_github_id(profile.id)
        if user is None:
            user = User(github_id=profile.id, username=profile.login)
            self.user_repo.add(user)
            logger.info("User created", github_id=profile.id)

        user.username = profile.login
        user.email = profile.email
        user.name = profile.name
        user.avatar_url = profile.avatar_url
        user.access_token = github_token
        user.updated_at = utc_now()

        await self.session.commit()
        await self.session.refresh(user)

        return user, create_access_token(user.id, user.username)

    async def get_user_from_token(self, token: str) -> User:
        """Resolve a Scribe access token to its user.

        Raises:
            AuthenticationRequired: If the token is invalid, expired or its user is gone.
        """
        payload = decode_token(token)
        if payload is None:
            raise AuthenticationRequired("Invalid or expired token")

        if payload.get("type") != TokenType.ACCESS.value:
            raise AuthenticationRequired("Invalid token type")

        try:
            user_id = UUID(str(payload.get("sub")))
        except ValueError as e:
            raise AuthenticationRequired("Invalid token payload") from e

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise AuthenticationRequired("User not found")
        return user
