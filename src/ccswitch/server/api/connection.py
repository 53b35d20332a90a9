"""Connection test API endpoint."""

from dataclasses import asdict

from fastapi import APIRouter

from ccswitch.server.auth import CurrentUser
from ccswitch.server.schemas.common import ProbeResponse
from ccswitch.server.schemas.transfer import ConnectionTestRequest
from ccswitch.server.services.prober import ConnectionProber

router = APIRouter()


@router.post("/api/connection/test", response_model=ProbeResponse)
async def test_connection(payload: ConnectionTestRequest, _user: CurrentUser) -> ProbeResponse:
    """
    Test a provider or MCP server that has not been saved yet.

    Always answers 200; the outcome is in ``success``.
    """
    async with ConnectionProber() as prober:
        result = await prober.probe(payload.type, payload.model_dump(exclude={"type"}))
    return ProbeResponse(**asdict(result))
