"""Repository for User entity."""

from sqlmodel import select

from src.scribe.models import User
from src.scribe.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for GitHub-authenticated users."""

    model = User

    async def get_by_github_id(self, github_id: int) -> User | None:
        """Get user by their numeric GitHub account id."""
        result = await self.session.execute(select(User).where(User.github_id == github_id))
        return result.scalar_one_or_none()
