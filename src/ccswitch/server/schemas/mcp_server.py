"""Schemas for MCP server API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ccswitch.data.models.mcp_server import TransportType
from ccswitch.data.models.provider import AppType


class McpServerCreate(BaseModel):
    """MCP server create payload."""

    name: str = Field(..., min_length=1, max_length=255, description="Server key in configs")
    transport_type: TransportType = Field(TransportType.STDIO, description="Transport")
    command: str | None = Field(None, description="Command for stdio servers")
    url: str | None = Field(None, description="URL for http and sse servers")
    args: list[str] = Field(default_factory=list, description="Command arguments")
    env: dict[str, str] = Field(default_factory=dict, description="Environment variables")
    app_bindings: list[AppType] = Field(
        default_factory=lambda: [AppType.CLAUDE], description="Tools the server is exported for"
    )
    enabled: bool = True


class McpServerUpdate(BaseModel):
    """MCP server update payload. Only given fields change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    transport_type: TransportType | None = None
    command: str | None = None
    url: str | None = None
    args: list[str] | None = None
    env: dict[str, str] | None = None
    app_bindings: list[AppType] | None = None
    enabled: bool | None = None


class McpServerResponse(BaseModel):
    """MCP server response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    transport_type: TransportType
    command: str | None = None
    url: str | None = None
    args: list[str]
    env: dict[str, str]
    app_bindings: list[AppType]
    enabled: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class McpTemplateResponse(BaseModel):
    """Built-in MCP server template."""

    index: int
    name: str
    transport_type: TransportType
    command: str
    args: list[str]
