"""OpenCode config assembler."""

from __future__ import annotations

from ccswitch.adapters.base import ConfigSelection, ToolAssembler, dump_json
from ccswitch.adapters.mcp import encode_mcp_servers_json
from ccswitch.adapters.registry import register_assembler
from ccswitch.data.models.provider import AppType


class OpenCodeAssembler(ToolAssembler):
    """Assembles config.json and OPENCODE.md for OpenCode."""

    @property
    def name(self) -> AppType:
        return AppType.OPENCODE

    @property
    def display_name(self) -> str:
        return "OpenCode"

    @property
    def config_file(self) -> str:
        return "config.json"

    @property
    def install_locations(self) -> dict[str, str]:
        return {
            "config.json": "~/.config/opencode/config.json",
            "OPENCODE.md": "project root",
        }

    def render_config(self, selection: ConfigSelection) -> str:
        return dump_json({"mcpServers": encode_mcp_servers_json(selection.mcp_servers)})


# Auto-register this assembler when module is imported
register_assembler(OpenCodeAssembler())
