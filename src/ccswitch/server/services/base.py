"""Shared pieces for user-scoped services."""

from sqlalchemy.ext.asyncio import AsyncSession


class RecordNotFoundError(Exception):
    """Raised when a record does not exist for the current user."""

    def __init__(self, kind: str, record_id: int) -> None:
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class UserScopedService:
    """Base for services that act on behalf of one user."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        self.session = session
        self.user_id = user_id
