"""Gemini CLI config assembler."""

from __future__ import annotations

from ccswitch.adapters.base import ConfigSelection, ToolAssembler, dump_json
from ccswitch.adapters.mcp import encode_mcp_servers_json
from ccswitch.adapters.registry import register_assembler
from ccswitch.data.models.provider import AppType


class GeminiCliAssembler(ToolAssembler):
    """Assembles settings.json and GEMINI.md for Gemini CLI.

    Provider credentials are never written: Gemini CLI reads its API key
    from the environment.
    """

    @property
    def name(self) -> AppType:
        return AppType.GEMINI

    @property
    def display_name(self) -> str:
        return "Gemini CLI"

    @property
    def config_file(self) -> str:
        return "settings.json"

    @property
    def install_locations(self) -> dict[str, str]:
        return {
            "settings.json": "~/.gemini/settings.json",
            "GEMINI.md": "project root",
        }

    def render_config(self, selection: ConfigSelection) -> str:
        return dump_json({"mcpServers": encode_mcp_servers_json(selection.mcp_servers)})


# Auto-register this assembler when module is imported
register_assembler(GeminiCliAssembler())
