"""Repository for PromptOptimizeHistory model."""

from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.optimize_history import PromptOptimizeHistory
from ccswitch.data.repositories.base import UserScopedRepository


class PromptOptimizeHistoryRepository(UserScopedRepository[PromptOptimizeHistory]):
    """Repository for a user's prompt optimization history."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        super().__init__(PromptOptimizeHistory, session, user_id)

    async def list_recent(self, limit: int = 20) -> list[PromptOptimizeHistory]:
        """List the most recent entries first."""
        query = (
            self._select()
            .order_by(PromptOptimizeHistory.created_at.desc(), PromptOptimizeHistory.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
