"""API routes and endpoints."""

from fastapi import APIRouter

from ccswitch.server.api.auth import router as auth_router
from ccswitch.server.api.connection import router as connection_router
from ccswitch.server.api.export import router as export_router
from ccswitch.server.api.health import router as health_router
from ccswitch.server.api.mcp_servers import router as mcp_servers_router
from ccswitch.server.api.prompts import router as prompts_router
from ccswitch.server.api.providers import router as providers_router
from ccswitch.server.api.skills import router as skills_router
from ccswitch.server.api.transfer import router as transfer_router

# Main API router
api_router = APIRouter()

# Include sub-routers
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(providers_router, tags=["providers"])
api_router.include_router(mcp_servers_router, tags=["mcp-servers"])
api_router.include_router(prompts_router, tags=["prompts"])
api_router.include_router(skills_router, tags=["skills"])
api_router.include_router(connection_router, tags=["connection"])
api_router.include_router(export_router, tags=["export"])
api_router.include_router(transfer_router, tags=["import"])

__all__ = ["api_router"]
