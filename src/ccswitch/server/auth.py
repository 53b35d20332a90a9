"""API-key authentication.

Each user owns one key. The database keeps only its SHA-256 digest, so a
key can be displayed once, when its user is created, and never again.
"""

import hashlib
import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.database import get_session
from ccswitch.data.models.user import User
from ccswitch.data.repositories.user import UserRepository

DEFAULT_USER_NAME = "default"

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def hash_api_key(key: str) -> str:
    """Hex SHA-256 digest stored in ``users.api_key_hash``."""
    return hashlib.sha256(key.encode()).hexdigest()


def generate_api_key() -> str:
    return secrets.token_urlsafe(32)


async def create_user(session: AsyncSession, name: str) -> tuple[User, str]:
    """Insert a user and return it with its plain key."""
    key = generate_api_key()
    user = await UserRepository(session).create(name=name, api_key_hash=hash_api_key(key))
    return user, key


async def ensure_default_user(session: AsyncSession) -> str | None:
    """
    Create the ``default`` user on an empty database.

    Returns:
        The new user's plain key, or None when users already exist.
    """
    if await UserRepository(session).count() > 0:
        return None
    _, key = await create_user(session, DEFAULT_USER_NAME)
    return key


async def get_current_user(
    api_key: Annotated[str | None, Security(api_key_header)],
    session: AsyncSession = Depends(get_session),
) -> User:
    """
    Resolve the ``X-API-Key`` header to its owner.

    Raises:
        HTTPException: 401 when the header is absent or matches no user.
    """
    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-API-Key header.",
        )

    user = await UserRepository(session).get_by_api_key_hash(hash_api_key(api_key))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key.",
        )
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
