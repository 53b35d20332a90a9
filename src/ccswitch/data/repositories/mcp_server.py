"""Repository for McpServer model."""

from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.mcp_server import McpServer
from ccswitch.data.repositories.base import UserScopedRepository


class McpServerRepository(UserScopedRepository[McpServer]):
    """Repository for a user's MCP servers."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        super().__init__(McpServer, session, user_id)

    async def list_all(self) -> list[McpServer]:
        """List MCP servers in creation order."""
        query = self._select().order_by(McpServer.created_at, McpServer.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())
