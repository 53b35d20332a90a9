"""Service that turns a user's records into tool configs and archives."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.adapters import get_assembler, select_for_tool
from ccswitch.adapters.base import Artifact, ToolAssembler
from ccswitch.data.models.provider import AppType
from ccswitch.data.records import (
    McpServerRecord,
    PromptRecord,
    ProviderRecord,
    RecordBase,
    SkillRecord,
    SkillsRepoRecord,
)
from ccswitch.data.repositories import (
    McpServerRepository,
    PromptRepository,
    ProviderRepository,
    SkillRepository,
    SkillsRepoRepository,
)
from ccswitch.server.services.base import UserScopedService
from ccswitch.server.utils.archive import (
    BACKUP_FILES,
    build_backup_archive,
    build_module_export,
    build_tool_archive,
)

logger = logging.getLogger(__name__)

EXPORT_MODULES = tuple(BACKUP_FILES)


class UnknownExportTargetError(Exception):
    """Raised for a tool or module name that cannot be exported."""

    pass


@dataclass(frozen=True)
class PreviewFile:
    """One file of a tool export, as shown before download."""

    path: str
    install_location: str | None
    content: str


def utc_today() -> date:
    return datetime.now(UTC).date()


@dataclass
class UserRecords:
    """Every collection of one user, as plain records in list order."""

    providers: list[ProviderRecord] = field(default_factory=list)
    mcp_servers: list[McpServerRecord] = field(default_factory=list)
    prompts: list[PromptRecord] = field(default_factory=list)
    skills: list[SkillRecord] = field(default_factory=list)
    skills_repos: list[SkillsRepoRecord] = field(default_factory=list)

    def collections(self) -> dict[str, list[RecordBase]]:
        """Collections keyed by their backup name."""
        return {name: list(getattr(self, name)) for name in EXPORT_MODULES}


class ExportService(UserScopedService):
    """Builds exports from the records of one user."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        super().__init__(session, user_id)
        self.provider_repo = ProviderRepository(session, user_id)
        self.mcp_repo = McpServerRepository(session, user_id)
        self.prompt_repo = PromptRepository(session, user_id)
        self.skill_repo = SkillRepository(session, user_id)
        self.skills_repo_repo = SkillsRepoRepository(session, user_id)

    async def load_records(self) -> UserRecords:
        """Load every collection in list order as plain records."""
        return UserRecords(
            providers=[
                ProviderRecord.model_validate(row) for row in await self.provider_repo.list_all()
            ],
            mcp_servers=[
                McpServerRecord.model_validate(row) for row in await self.mcp_repo.list_all()
            ],
            prompts=[
                PromptRecord.model_validate(row) for row in await self.prompt_repo.list_all()
            ],
            skills=[SkillRecord.model_validate(row) for row in await self.skill_repo.list_all()],
            skills_repos=[
                SkillsRepoRecord.model_validate(row)
                for row in await self.skills_repo_repo.list_all()
            ],
        )

    def _assembler(self, tool: str) -> ToolAssembler:
        assembler = get_assembler(tool)
        if assembler is None:
            raise UnknownExportTargetError(f"Unknown tool: {tool}")
        return assembler

    async def assemble(self, tool: str) -> tuple[ToolAssembler, Artifact]:
        """
        Assemble the artifact for one tool.

        Raises:
            UnknownExportTargetError: If ``tool`` is not a supported tool
        """
        assembler = self._assembler(tool)
        records = await self.load_records()
        selection = select_for_tool(
            AppType(tool),
            providers=records.providers,
            mcp_servers=records.mcp_servers,
            prompts=records.prompts,
            skills=records.skills,
        )
        return assembler, assembler.assemble(selection)

    async def preview(self, tool: str) -> list[PreviewFile]:
        """List the files a tool export would contain."""
        assembler, artifact = await self.assemble(tool)
        locations = assembler.install_locations
        files = []
        for path, content in artifact.files.items():
            location = locations.get(path)
            if location is None and path.startswith("skills/"):
                location = locations.get("skills/")
            text = content if isinstance(content, str) else content.decode("utf-8", "replace")
            files.append(PreviewFile(path=path, install_location=location, content=text))
        return files

    async def export_tool(self, tool: str, today: date | None = None) -> tuple[str, bytes]:
        """Build the zip archive for one tool."""
        _, artifact = await self.assemble(tool)
        filename, data = build_tool_archive(tool, artifact, today or utc_today())
        logger.info(f"Exported {tool} config for user {self.user_id} ({len(artifact.files)} files)")
        return filename, data

    async def export_backup(self, today: date | None = None) -> tuple[str, bytes]:
        """Build the full data backup archive."""
        records = await self.load_records()
        collections = {
            name: [record.to_export_dict() for record in rows]
            for name, rows in records.collections().items()
        }
        filename, data = build_backup_archive(collections, today or utc_today())
        logger.info(f"Exported backup for user {self.user_id}")
        return filename, data

    async def export_module(self, module: str, today: date | None = None) -> tuple[str, str]:
        """
        Export one collection as a JSON file.

        Raises:
            UnknownExportTargetError: If ``module`` is not a known collection
        """
        if module not in EXPORT_MODULES:
            raise UnknownExportTargetError(f"Unknown module: {module}")
        records = await self.load_records()
        rows: list[dict[str, Any]] = [record.to_export_dict() for record in records.collections()[module]]
        return build_module_export(module, rows, today or utc_today())
