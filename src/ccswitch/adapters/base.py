"""Base classes for config assemblers."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from ccswitch.data.models.prompt import TargetFile
from ccswitch.data.models.provider import AppType, ProviderType
from ccswitch.data.records import (
    McpServerRecord,
    PromptRecord,
    ProviderRecord,
    SkillRecord,
)

PROMPT_FILES: dict[AppType, TargetFile] = {
    AppType.CLAUDE: TargetFile.CLAUDE,
    AppType.CODEX: TargetFile.AGENTS,
    AppType.GEMINI: TargetFile.GEMINI,
    AppType.OPENCODE: TargetFile.OPENCODE,
}


@dataclass(frozen=True)
class ConfigSelection:
    """Records already filtered for one tool, in input order."""

    app_type: AppType
    providers: tuple[ProviderRecord, ...] = ()
    mcp_servers: tuple[McpServerRecord, ...] = ()
    prompts: tuple[PromptRecord, ...] = ()
    skills: tuple[SkillRecord, ...] = ()

    @property
    def prompt(self) -> PromptRecord | None:
        """First matching active prompt."""
        return self.prompts[0] if self.prompts else None

    @property
    def custom_provider(self) -> ProviderRecord | None:
        """First included provider that is not an official login."""
        for provider in self.providers:
            if provider.provider_type != ProviderType.OFFICIAL:
                return provider
        return None


def select_for_tool(
    app_type: AppType,
    providers: Iterable[ProviderRecord] = (),
    mcp_servers: Iterable[McpServerRecord] = (),
    prompts: Iterable[PromptRecord] = (),
    skills: Iterable[SkillRecord] = (),
) -> ConfigSelection:
    """
    Filter raw records down to what one tool's export should contain.

    An MCP server is kept when it is enabled and bound to the tool, a
    provider when it is enabled and belongs to the tool, a prompt when it
    is active and targets the tool's instruction file, and a skill when it
    is installed. Relative order is preserved.
    """
    prompt_file = PROMPT_FILES[app_type]
    return ConfigSelection(
        app_type=app_type,
        providers=tuple(p for p in providers if p.enabled and p.app_type == app_type),
        mcp_servers=tuple(m for m in mcp_servers if m.enabled and app_type in m.app_bindings),
        prompts=tuple(p for p in prompts if p.is_active and p.target_file == prompt_file),
        skills=tuple(s for s in skills if s.installed),
    )


@dataclass
class Artifact:
    """Files produced by one assembly pass, keyed by relative path."""

    app_type: AppType
    files: dict[str, str | bytes] = field(default_factory=dict)

    def add(self, path: str, content: str | bytes) -> None:
        self.files[path] = content

    def paths(self) -> list[str]:
        return list(self.files)


def dump_json(data: dict[str, Any]) -> str:
    """Serialize a config object the way every JSON config file is written."""
    return json.dumps(data, indent=2, ensure_ascii=False)


class ToolAssembler(ABC):
    """Base class for per-tool config assemblers."""

    version: str = "0.1.0"

    @property
    @abstractmethod
    def name(self) -> AppType:
        """Tool this assembler produces configuration for."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-friendly tool name."""

    @property
    @abstractmethod
    def config_file(self) -> str:
        """Name of the primary config file."""

    @property
    @abstractmethod
    def install_locations(self) -> dict[str, str]:
        """Where each produced file belongs on the tool's host."""

    @property
    def prompt_file(self) -> TargetFile:
        """Instruction file written from the active prompt."""
        return PROMPT_FILES[self.name]

    @abstractmethod
    def render_config(self, selection: ConfigSelection) -> str:
        """Render the primary config file."""

    def add_extra_files(self, artifact: Artifact, selection: ConfigSelection) -> None:  # noqa: B027
        """Hook for tools that ship more than a config and a prompt file."""

    def assemble(self, selection: ConfigSelection) -> Artifact:
        """
        Build the full artifact for a selection.

        Never fails for well-typed input: missing providers, prompts or
        servers only make the artifact smaller.
        """
        artifact = Artifact(app_type=self.name)
        artifact.add(self.config_file, self.render_config(selection))

        prompt = selection.prompt
        if prompt is not None:
            artifact.add(self.prompt_file.value, prompt.content or "")

        self.add_extra_files(artifact, selection)
        return artifact
