"""Repository for User model."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.user import User
from ccswitch.data.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def get_by_name(self, name: str) -> User | None:
        """Fetch a user by name."""
        result = await self.session.execute(select(User).where(User.name == name))
        return result.scalar_one_or_none()

    async def get_by_api_key_hash(self, api_key_hash: str) -> User | None:
        """Fetch the user owning a hashed API key."""
        result = await self.session.execute(
            select(User).where(User.api_key_hash == api_key_hash)
        )
        return result.scalar_one_or_none()
