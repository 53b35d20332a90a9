"""Liveness endpoint."""

from fastapi import APIRouter

from ccswitch import __version__
from ccswitch.server.schemas.common import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report that the server is up, with its version. Needs no API key."""
    return HealthResponse(status="healthy", version=__version__)
