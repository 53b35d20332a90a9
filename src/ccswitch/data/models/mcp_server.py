"""MCP server model."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import JSON, Boolean, String
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.orm import Mapped, mapped_column

from ccswitch.data.models.base import BaseModel, UserOwnedMixin


class TransportType(str, Enum):
    """Transport used to reach an MCP server."""

    STDIO = "stdio"
    HTTP = "http"
    SSE = "sse"


class McpServer(UserOwnedMixin, BaseModel):
    """Model Context Protocol server descriptor."""

    __tablename__ = "mcp_servers"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    transport_type: Mapped[TransportType] = mapped_column(
        SqlEnum(
            TransportType,
            name="transport_type",
            values_callable=lambda obj: [item.value for item in obj],
        ),
        nullable=False,
        default=TransportType.STDIO,
    )
    command: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    args: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    env: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False, default=dict)
    app_bindings: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
