"""Schemas for export, import and connection test API."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ccswitch.data.models.mcp_server import TransportType
from ccswitch.data.models.provider import AppType, ProviderType


class ExportFileResponse(BaseModel):
    """One file of a tool export preview."""

    path: str = Field(..., description="Path inside the archive root")
    install_location: str | None = Field(None, description="Where the file belongs")
    content: str


class ImportResultResponse(BaseModel):
    """Import outcome for one collection."""

    kind: str = Field(..., description="Detected record kind")
    imported: int = Field(..., description="Rows inserted")
    skipped: int = Field(..., description="Rows that failed and were skipped")


class DeepLinkResponse(BaseModel):
    """Generated deep link."""

    link: str
    data: str = Field(..., description="Encoded provider payload")
    providers: int = Field(..., description="Number of providers in the link")


class DeepLinkRequest(BaseModel):
    """Deep link payload to decode or import."""

    data: str = Field(..., min_length=1)


class DeepLinkProvider(BaseModel):
    """Provider fields carried by a deep link."""

    name: Any = None
    provider_type: Any = None
    base_url: Any = None
    app_type: Any = None


class ConnectionTestRequest(BaseModel):
    """Connection test for a provider or MCP server that may not be stored."""

    model_config = ConfigDict(extra="ignore")

    type: Literal["provider", "mcp_server"]
    provider_type: ProviderType | None = None
    base_url: str | None = None
    api_key: str | None = None
    app_type: AppType | None = None
    transport_type: TransportType | None = None
    command: str | None = None
    url: str | None = None
    args: list[str] | None = None
