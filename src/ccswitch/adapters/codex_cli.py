"""Codex CLI config assembler.

Codex reads ``~/.codex/config.toml``; MCP servers live in
``[mcp_servers.<name>]`` tables next to the top-level model settings.
"""

from __future__ import annotations

from ccswitch.adapters.base import ConfigSelection, ToolAssembler
from ccswitch.adapters.mcp import encode_mcp_servers_toml
from ccswitch.adapters.registry import register_assembler
from ccswitch.adapters.toml_writer import TomlDocument
from ccswitch.data.models.provider import AppType

DEFAULT_MODEL = "o4-mini"

HEADER = (
    "cc-switch - Codex CLI configuration",
    "Place at: ~/.codex/config.toml",
)


def build_config_toml(selection: ConfigSelection) -> str:
    """Render config.toml for Codex CLI."""
    document = TomlDocument()
    for line in HEADER:
        document.comment(line)
    document.blank()

    provider = selection.custom_provider
    model = provider.model_id if provider is not None else None
    document.assign("model", model or DEFAULT_MODEL)
    if provider is not None:
        if provider.api_key:
            document.assign("api_key", provider.api_key)
        if provider.base_url:
            document.assign("provider_base_url", provider.base_url)

    encode_mcp_servers_toml(document, selection.mcp_servers)
    return document.render()


class CodexCliAssembler(ToolAssembler):
    """Assembles config.toml and AGENTS.md for Codex CLI."""

    @property
    def name(self) -> AppType:
        return AppType.CODEX

    @property
    def display_name(self) -> str:
        return "Codex CLI"

    @property
    def config_file(self) -> str:
        return "config.toml"

    @property
    def install_locations(self) -> dict[str, str]:
        return {
            "config.toml": "~/.codex/config.toml",
            "AGENTS.md": "project root",
        }

    def render_config(self, selection: ConfigSelection) -> str:
        return build_config_toml(selection)


# Auto-register this assembler when module is imported
register_assembler(CodexCliAssembler())
