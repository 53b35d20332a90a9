"""Authentication API endpoints."""

from fastapi import APIRouter

from ccswitch.server.auth import CurrentUser
from ccswitch.server.schemas.common import MessageResponse

router = APIRouter()


@router.get("/api/auth/verify", response_model=MessageResponse)
async def verify_api_key(user: CurrentUser) -> MessageResponse:
    """
    Verify if the provided API key is valid.

    Returns:
        Success message naming the user the key belongs to.
    """
    return MessageResponse(message=f"API key is valid for user {user.name}")
