"""Repository for Prompt model."""

from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.prompt import Prompt
from ccswitch.data.repositories.base import UserScopedRepository


class PromptRepository(UserScopedRepository[Prompt]):
    """Repository for a user's prompts."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        super().__init__(Prompt, session, user_id)

    async def list_all(self) -> list[Prompt]:
        """List prompts in creation order."""
        query = self._select().order_by(Prompt.created_at, Prompt.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())
