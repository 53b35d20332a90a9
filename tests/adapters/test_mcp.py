"""Tests for the MCP server encoders."""

import tomllib

from ccswitch.adapters.mcp import encode_mcp_servers_json, encode_mcp_servers_toml
from ccswitch.adapters.toml_writer import TomlDocument
from ccswitch.data.models.mcp_server import TransportType
from ccswitch.data.records import McpServerRecord


def test_json_stdio_without_command() -> None:
    """A stdio server with no command is still emitted, with an empty command."""
    server = McpServerRecord(name="broken", transport_type=TransportType.STDIO)

    assert encode_mcp_servers_json([server]) == {"broken": {"command": "", "args": []}}


def test_json_name_collision_last_wins() -> None:
    """Servers sharing a name collapse into the last one."""
    servers = [
        McpServerRecord(name="dup", command="first"),
        McpServerRecord(name="dup", command="second"),
    ]

    assert encode_mcp_servers_json(servers)["dup"]["command"] == "second"


def test_toml_stdio_with_env() -> None:
    """stdio tables carry type, command, args and dotted env keys."""
    document = TomlDocument()
    encode_mcp_servers_toml(
        document,
        [McpServerRecord(name="fs", command="npx", args=["-y"], env={"HOME_DIR": "/tmp"})],
    )

    assert tomllib.loads(document.render()) == {
        "mcp_servers": {
            "fs": {"type": "stdio", "command": "npx", "args": ["-y"], "env": {"HOME_DIR": "/tmp"}}
        }
    }


def test_toml_sse_has_no_type() -> None:
    """Remote servers are written with a url only."""
    document = TomlDocument()
    encode_mcp_servers_toml(
        document,
        [McpServerRecord(name="events", transport_type=TransportType.SSE, url="https://e.example")],
    )

    assert tomllib.loads(document.render()) == {
        "mcp_servers": {"events": {"url": "https://e.example"}}
    }


def test_toml_name_collision_last_wins() -> None:
    """Duplicate and sanitize-equal names produce one table holding the last server."""
    document = TomlDocument()
    encode_mcp_servers_toml(
        document,
        [
            McpServerRecord(name="fs", command="first"),
            McpServerRecord(name="my server", command="spaced"),
            McpServerRecord(name="fs", command="second"),
            McpServerRecord(name="my_server", command="underscored"),
        ],
    )

    parsed = tomllib.loads(document.render())
    assert list(parsed["mcp_servers"]) == ["fs", "my_server"]
    assert parsed["mcp_servers"]["fs"]["command"] == "second"
    assert parsed["mcp_servers"]["my_server"]["command"] == "underscored"
    assert document.render().count("[mcp_servers.fs]") == 1
