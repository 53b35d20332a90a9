"""Repository for Provider model."""

from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.provider import AppType, Provider
from ccswitch.data.repositories.base import UserScopedRepository


class ProviderRepository(UserScopedRepository[Provider]):
    """Repository for a user's providers."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        super().__init__(Provider, session, user_id)

    async def list_all(self) -> list[Provider]:
        """List providers in display order."""
        query = self._select().order_by(Provider.sort_order, Provider.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_by_app(self, app_type: AppType) -> list[Provider]:
        """List providers bound to one tool, in display order."""
        query = (
            self._select()
            .where(Provider.app_type == app_type)
            .order_by(Provider.sort_order, Provider.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
