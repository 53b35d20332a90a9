"""Service for managing MCP server descriptors."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.mcp_server import McpServer, TransportType
from ccswitch.data.models.provider import AppType
from ccswitch.data.repositories.mcp_server import McpServerRepository
from ccswitch.server.services.base import UserScopedService

logger = logging.getLogger(__name__)

MCP_TEMPLATES: list[dict[str, Any]] = [
    {
        "name": "mcp-fetch",
        "transport_type": TransportType.STDIO,
        "command": "npx",
        "args": ["-y", "@anthropics/mcp-fetch"],
    },
    {
        "name": "mcp-filesystem",
        "transport_type": TransportType.STDIO,
        "command": "npx",
        "args": ["-y", "@anthropics/mcp-filesystem", "/path"],
    },
    {
        "name": "mcp-memory",
        "transport_type": TransportType.STDIO,
        "command": "npx",
        "args": ["-y", "@anthropics/mcp-memory"],
    },
]

DEFAULT_APP_BINDINGS = [AppType.CLAUDE.value]


def _normalize(fields: dict[str, Any]) -> dict[str, Any]:
    """Store bindings as plain strings so the JSON column round-trips."""
    if "app_bindings" in fields and fields["app_bindings"] is not None:
        fields["app_bindings"] = [AppType(app).value for app in fields["app_bindings"]]
    for key, empty in (("args", []), ("env", {})):
        if key in fields and fields[key] is None:
            fields[key] = empty
    return fields


class McpServerService(UserScopedService):
    """Service for a user's MCP servers."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        super().__init__(session, user_id)
        self.repo = McpServerRepository(session, user_id)

    async def list_servers(self) -> list[McpServer]:
        """List MCP servers in creation order."""
        return await self.repo.list_all()

    async def get_server(self, server_id: int) -> McpServer | None:
        """Get an MCP server by ID."""
        return await self.repo.get_by_id(server_id)

    async def create_server(self, **fields: Any) -> McpServer:
        """Create an MCP server, bound to Claude Code unless told otherwise."""
        fields.setdefault("app_bindings", list(DEFAULT_APP_BINDINGS))
        server = await self.repo.create(**_normalize(fields))
        logger.info(f"Created MCP server {server.id} ({server.name}) for user {self.user_id}")
        return server

    async def update_server(self, server_id: int, **fields: Any) -> McpServer | None:
        """Update an MCP server."""
        return await self.repo.update(server_id, **_normalize(fields))

    async def delete_server(self, server_id: int) -> bool:
        """Delete an MCP server."""
        return await self.repo.delete(server_id)

    async def set_enabled(self, server_id: int, enabled: bool) -> McpServer | None:
        """Enable or disable an MCP server."""
        return await self.repo.update(server_id, enabled=enabled)

    async def apply_template(self, index: int) -> McpServer:
        """
        Create an MCP server from one of the built-in templates.

        Raises:
            IndexError: If no template exists at ``index``
        """
        if not 0 <= index < len(MCP_TEMPLATES):
            raise IndexError(f"No MCP template at index {index}")
        template = MCP_TEMPLATES[index]
        return await self.create_server(**{**template, "args": list(template["args"])})
