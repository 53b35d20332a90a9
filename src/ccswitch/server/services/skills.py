"""Service for skills repositories and the skills discovered in them."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.skill import Skill, SkillsRepo
from ccswitch.data.repositories.skill import SkillRepository, SkillsRepoRepository
from ccswitch.server.services.base import RecordNotFoundError, UserScopedService
from ccswitch.server.services.skill_scanner import SkillScanner

logger = logging.getLogger(__name__)


class SkillService(UserScopedService):
    """Service for a user's skills and skills repositories."""

    def __init__(
        self,
        session: AsyncSession,
        user_id: int,
        scanner: SkillScanner | None = None,
    ) -> None:
        super().__init__(session, user_id)
        self.repo_repo = SkillsRepoRepository(session, user_id)
        self.skill_repo = SkillRepository(session, user_id)
        self.scanner = scanner

    async def list_repos(self) -> list[SkillsRepo]:
        return await self.repo_repo.list_all()

    async def get_repo(self, repo_id: int) -> SkillsRepo | None:
        return await self.repo_repo.get_by_id(repo_id)

    async def create_repo(self, **fields: Any) -> SkillsRepo:
        return await self.repo_repo.create(**fields)

    async def update_repo(self, repo_id: int, **fields: Any) -> SkillsRepo | None:
        return await self.repo_repo.update(repo_id, **fields)

    async def delete_repo(self, repo_id: int) -> bool:
        """Delete a repository together with the skills discovered in it."""
        repo = await self.repo_repo.get_by_id(repo_id)
        if repo is None:
            return False

        await self.skill_repo.delete_for_repo(repo_id)
        await self.session.delete(repo)
        await self.session.commit()
        logger.info(f"Deleted skills repo {repo.full_name} for user {self.user_id}")
        return True

    async def list_skills(
        self,
        search: str | None = None,
        installed: bool | None = None,
        repo_id: int | None = None,
    ) -> list[Skill]:
        """List skills, optionally filtered."""
        return await self.skill_repo.search(search, installed=installed, repo_id=repo_id)

    async def set_installed(self, skill_id: int, installed: bool) -> Skill | None:
        """Mark a skill as installed or available."""
        return await self.skill_repo.update(skill_id, installed=installed)

    async def scan_repo(self, repo_id: int) -> int:
        """
        Record every skill directory of a repository that is not known yet.

        Args:
            repo_id: ID of the skills repository

        Returns:
            Number of skills created

        Raises:
            RecordNotFoundError: If the repository does not exist
            SkillScanError: If the repository listing cannot be fetched
        """
        repo = await self.repo_repo.get_by_id(repo_id)
        if repo is None:
            raise RecordNotFoundError("Skills repo", repo_id)

        scanner = self.scanner or SkillScanner()
        try:
            dirs = await scanner.list_skill_dirs(repo)
            known = await self.skill_repo.list_names_for_repo(repo_id)

            created = 0
            for entry in dirs:
                name = entry.get("name")
                if not name or name in known:
                    continue
                description = await scanner.describe(repo, entry.get("path") or name)
                await self.skill_repo.stage(name=name, description=description, repo_id=repo_id)
                known.add(name)
                created += 1

            await self.session.commit()
        finally:
            if self.scanner is None:
                await scanner.close()

        logger.info(f"Scanned {repo.full_name}: {created} new skills")
        return created
