"""MCP server API endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.database import get_session
from ccswitch.server.auth import CurrentUser
from ccswitch.server.schemas.common import EnabledUpdate, ProbeResponse
from ccswitch.server.schemas.mcp_server import (
    McpServerCreate,
    McpServerResponse,
    McpServerUpdate,
    McpTemplateResponse,
)
from ccswitch.server.services.mcp_servers import MCP_TEMPLATES, McpServerService
from ccswitch.server.services.prober import ConnectionProber

router = APIRouter()


@router.get("/api/mcp-servers", response_model=list[McpServerResponse])
async def list_servers(
    user: CurrentUser, session: AsyncSession = Depends(get_session)
) -> list[McpServerResponse]:
    """List MCP servers."""
    servers = await McpServerService(session, user.id).list_servers()
    return [McpServerResponse.model_validate(server) for server in servers]


@router.post(
    "/api/mcp-servers", response_model=McpServerResponse, status_code=status.HTTP_201_CREATED
)
async def create_server(
    payload: McpServerCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> McpServerResponse:
    """Create an MCP server."""
    server = await McpServerService(session, user.id).create_server(**payload.model_dump())
    return McpServerResponse.model_validate(server)


@router.get("/api/mcp-servers/templates", response_model=list[McpTemplateResponse])
async def list_templates(_user: CurrentUser) -> list[McpTemplateResponse]:
    """List the built-in MCP server templates."""
    return [
        McpTemplateResponse(index=index, **template)
        for index, template in enumerate(MCP_TEMPLATES)
    ]


@router.post(
    "/api/mcp-servers/templates/{index}",
    response_model=McpServerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def apply_template(
    index: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> McpServerResponse:
    """Create an MCP server from a template."""
    try:
        server = await McpServerService(session, user.id).apply_template(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail="Template not found") from e
    return McpServerResponse.model_validate(server)


@router.get("/api/mcp-servers/{server_id}", response_model=McpServerResponse)
async def get_server(
    server_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> McpServerResponse:
    """Get an MCP server by ID."""
    server = await McpServerService(session, user.id).get_server(server_id)
    if server is None:
        raise HTTPException(status_code=404, detail="MCP server not found")
    return McpServerResponse.model_validate(server)


@router.put("/api/mcp-servers/{server_id}", response_model=McpServerResponse)
async def update_server(
    server_id: int,
    payload: McpServerUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> McpServerResponse:
    """Update an MCP server."""
    server = await McpServerService(session, user.id).update_server(
        server_id, **payload.model_dump(exclude_unset=True)
    )
    if server is None:
        raise HTTPException(status_code=404, detail="MCP server not found")
    return McpServerResponse.model_validate(server)


@router.patch("/api/mcp-servers/{server_id}/enabled", response_model=McpServerResponse)
async def set_server_enabled(
    server_id: int,
    payload: EnabledUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> McpServerResponse:
    """Enable or disable an MCP server."""
    server = await McpServerService(session, user.id).set_enabled(server_id, payload.enabled)
    if server is None:
        raise HTTPException(status_code=404, detail="MCP server not found")
    return McpServerResponse.model_validate(server)


@router.delete("/api/mcp-servers/{server_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_server(
    server_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> None:
    """Delete an MCP server."""
    if not await McpServerService(session, user.id).delete_server(server_id):
        raise HTTPException(status_code=404, detail="MCP server not found")


@router.post("/api/mcp-servers/{server_id}/test", response_model=ProbeResponse)
async def test_server(
    server_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> ProbeResponse:
    """Test a stored MCP server."""
    server = await McpServerService(session, user.id).get_server(server_id)
    if server is None:
        raise HTTPException(status_code=404, detail="MCP server not found")

    async with ConnectionProber() as prober:
        result = await prober.probe_mcp_server(
            server.transport_type, server.command, server.url, server.args
        )
    return ProbeResponse(**asdict(result))
