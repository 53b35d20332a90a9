"""Repositories for Skill and SkillsRepo models."""

from sqlalchemy import delete, or_
from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.skill import Skill, SkillsRepo
from ccswitch.data.repositories.base import UserScopedRepository


class SkillsRepoRepository(UserScopedRepository[SkillsRepo]):
    """Repository for a user's skills repositories."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        super().__init__(SkillsRepo, session, user_id)

    async def list_all(self) -> list[SkillsRepo]:
        """List repositories in creation order."""
        query = self._select().order_by(SkillsRepo.created_at, SkillsRepo.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())


class SkillRepository(UserScopedRepository[Skill]):
    """Repository for a user's skills."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        super().__init__(Skill, session, user_id)

    async def list_all(self) -> list[Skill]:
        """List skills by name."""
        query = self._select().order_by(Skill.name, Skill.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_installed(self) -> list[Skill]:
        """List installed skills by name."""
        query = self._select().where(Skill.installed.is_(True)).order_by(Skill.name, Skill.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_names_for_repo(self, repo_id: int) -> set[str]:
        """Return the names of skills already recorded for a repository."""
        query = self._select().where(Skill.repo_id == repo_id)
        result = await self.session.execute(query)
        return {skill.name for skill in result.scalars().all()}

    async def search(
        self,
        query_text: str | None = None,
        installed: bool | None = None,
        repo_id: int | None = None,
    ) -> list[Skill]:
        """
        Filter skills.

        Args:
            query_text: Case-insensitive match against name or description.
            installed: Only installed (True) or only available (False) skills.
            repo_id: Only skills discovered in this repository.

        Returns:
            Matching skills ordered by name.
        """
        query = self._select()
        if query_text:
            pattern = f"%{query_text.lower()}%"
            query = query.where(
                or_(
                    Skill.name.ilike(pattern),
                    Skill.description.ilike(pattern),
                )
            )
        if installed is not None:
            query = query.where(Skill.installed.is_(installed))
        if repo_id is not None:
            query = query.where(Skill.repo_id == repo_id)

        result = await self.session.execute(query.order_by(Skill.name, Skill.id))
        return list(result.scalars().all())

    async def delete_for_repo(self, repo_id: int) -> None:
        """Delete every skill recorded for a repository without committing."""
        await self.session.execute(
            delete(Skill).where(Skill.user_id == self.user_id, Skill.repo_id == repo_id)
        )
