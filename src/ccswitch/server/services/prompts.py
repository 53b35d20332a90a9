"""Service for managing prompts."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.prompt import Prompt
from ccswitch.data.repositories.prompt import PromptRepository
from ccswitch.server.services.base import UserScopedService


class PromptService(UserScopedService):
    """Service for a user's prompts."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        super().__init__(session, user_id)
        self.repo = PromptRepository(session, user_id)

    async def list_prompts(self) -> list[Prompt]:
        return await self.repo.list_all()

    async def get_prompt(self, prompt_id: int) -> Prompt | None:
        return await self.repo.get_by_id(prompt_id)

    async def create_prompt(self, **fields: Any) -> Prompt:
        return await self.repo.create(**fields)

    async def update_prompt(self, prompt_id: int, **fields: Any) -> Prompt | None:
        return await self.repo.update(prompt_id, **fields)

    async def delete_prompt(self, prompt_id: int) -> bool:
        return await self.repo.delete(prompt_id)

    async def set_active(self, prompt_id: int, is_active: bool) -> Prompt | None:
        """
        Activate or deactivate a prompt.

        Several prompts may be active for the same file; exports use the
        first one in list order.
        """
        return await self.repo.update(prompt_id, is_active=is_active)
