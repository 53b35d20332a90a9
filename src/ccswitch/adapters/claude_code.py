"""Claude Code config assembler."""

from __future__ import annotations

import re
from typing import Any

from ccswitch.adapters.base import Artifact, ConfigSelection, ToolAssembler, dump_json
from ccswitch.adapters.mcp import encode_mcp_servers_json
from ccswitch.adapters.registry import register_assembler
from ccswitch.data.models.provider import AppType
from ccswitch.data.records import SkillRecord

SETTINGS_SCHEMA_URL = "https://json.schemastore.org/claude-code-settings.json"

MODEL_ENV_KEYS = (
    "ANTHROPIC_MODEL",
    "ANTHROPIC_DEFAULT_SONNET_MODEL",
    "ANTHROPIC_DEFAULT_HAIKU_MODEL",
    "ANTHROPIC_DEFAULT_OPUS_MODEL",
)

SKILL_MD_TEMPLATE = """---
name: {name}
description: {description}
version: "1.0"
tags: []
---

# {name}

{description}
"""


_PATH_SEPARATORS = re.compile(r"[\\/]")


def skill_dir_name(name: str) -> str:
    """Directory name for a skill, kept to a single path segment inside ``skills/``."""
    segment = _PATH_SEPARATORS.sub("_", name)
    if segment.strip(".") == "":
        return segment.replace(".", "_") or "_"
    return segment


def render_skill_md(skill: SkillRecord) -> str:
    """Render the SKILL.md shipped for an installed skill."""
    return SKILL_MD_TEMPLATE.format(name=skill.name, description=skill.description or "")


def build_settings(selection: ConfigSelection) -> dict[str, Any]:
    """Build the settings.json object for Claude Code."""
    settings: dict[str, Any] = {"$schema": SETTINGS_SCHEMA_URL}

    provider = selection.custom_provider
    if provider is not None:
        env: dict[str, str] = {}
        if provider.api_key:
            env["ANTHROPIC_AUTH_TOKEN"] = provider.api_key
        if provider.base_url:
            env["ANTHROPIC_BASE_URL"] = provider.base_url
        settings["env"] = env

        model = provider.model_id
        if model:
            for key in MODEL_ENV_KEYS:
                env[key] = model
            settings["model"] = model

    settings["permissions"] = {"allow": ["*"], "deny": []}

    mcp_servers = encode_mcp_servers_json(selection.mcp_servers)
    if mcp_servers:
        settings["mcpServers"] = mcp_servers

    return settings


class ClaudeCodeAssembler(ToolAssembler):
    """Assembles settings.json, CLAUDE.md and skills for Claude Code."""

    @property
    def name(self) -> AppType:
        return AppType.CLAUDE

    @property
    def display_name(self) -> str:
        return "Claude Code"

    @property
    def config_file(self) -> str:
        return "settings.json"

    @property
    def install_locations(self) -> dict[str, str]:
        return {
            "settings.json": "~/.claude/settings.json",
            "CLAUDE.md": "~/.claude/CLAUDE.md",
            "skills/": "~/.claude/skills/",
        }

    def render_config(self, selection: ConfigSelection) -> str:
        return dump_json(build_settings(selection))

    def add_extra_files(self, artifact: Artifact, selection: ConfigSelection) -> None:
        for skill in selection.skills:
            path = f"skills/{skill_dir_name(skill.name)}/SKILL.md"
            artifact.add(path, render_skill_md(skill))


# Auto-register this assembler when module is imported
register_assembler(ClaudeCodeAssembler())
