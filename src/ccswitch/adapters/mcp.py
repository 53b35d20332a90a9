"""MCP server encoders.

Claude Code, Gemini CLI and OpenCode read the same JSON shape, which tags
remote servers with their ``type``. Codex CLI reads TOML tables and expects
remote servers to carry only a ``url``. The two encoders are kept separate
on purpose.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ccswitch.adapters.toml_writer import TomlDocument, sanitize_table_name
from ccswitch.data.models.mcp_server import TransportType
from ccswitch.data.records import McpServerRecord


def encode_mcp_servers_json(servers: Iterable[McpServerRecord]) -> dict[str, dict[str, Any]]:
    """
    Build the ``mcpServers`` object used by the JSON config files.

    Servers sharing a name collide; the last one wins.
    """
    result: dict[str, dict[str, Any]] = {}
    for server in servers:
        if server.transport_type == TransportType.STDIO:
            entry: dict[str, Any] = {
                "command": server.command or "",
                "args": list(server.args),
            }
            if server.env:
                entry["env"] = dict(server.env)
        else:
            entry = {"type": server.transport_type.value, "url": server.url or ""}
        result[server.name] = entry
    return result


def encode_mcp_servers_toml(document: TomlDocument, servers: Iterable[McpServerRecord]) -> None:
    """
    Append one ``[mcp_servers.<name>]`` table per sanitized name to a Codex document.

    Servers whose names sanitize to the same key collide; the last one wins,
    at the position of the first.
    """
    tables: dict[str, McpServerRecord] = {}
    for server in servers:
        tables[sanitize_table_name(server.name)] = server

    for table_name, server in tables.items():
        document.blank()
        document.table("mcp_servers", table_name)
        if server.transport_type == TransportType.STDIO:
            document.assign("type", "stdio")
            document.assign("command", server.command or "")
            document.assign("args", list(server.args))
        else:
            # remote servers: url only, no type key
            document.assign("url", server.url or "")
        for key, value in server.env.items():
            document.assign(("env", key), str(value))
