"""MCP server CLI commands."""

from typing import Any

import anyio
import typer
from rich.console import Console
from rich.table import Table

from ccswitch.cli.client import create_client, fail_request, require_api_key, send_request
from ccswitch.cli.commands.providers import print_probe_result

mcp_app = typer.Typer(name="mcp", help="List and test MCP servers")
console = Console()


def _target(server: dict[str, Any]) -> str:
    if server.get("transport_type") == "stdio":
        return " ".join([str(server.get("command") or ""), *server.get("args", [])]).strip()
    return str(server.get("url") or "")


def _render_servers_table(servers: list[dict[str, Any]]) -> None:
    table = Table(title="MCP Servers", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Transport", style="yellow")
    table.add_column("Command / URL", style="white")
    table.add_column("Tools", style="blue")
    table.add_column("Enabled")

    for server in servers:
        table.add_row(
            str(server["id"]),
            str(server["name"]),
            str(server["transport_type"]),
            _target(server) or "-",
            ", ".join(server.get("app_bindings", [])) or "-",
            "[green]yes[/green]" if server.get("enabled") else "[dim]no[/dim]",
        )

    console.print(table)


@mcp_app.command("list")
def list_servers() -> None:
    """List MCP servers."""
    require_api_key()
    anyio.run(_list_servers_async)


async def _list_servers_async() -> None:
    async with create_client() as client:
        response = await send_request(client, "GET", "/api/mcp-servers")

    if response.status_code != 200:
        fail_request("list MCP servers", response)

    servers = response.json()
    if not servers:
        console.print("No MCP servers configured.")
        return
    _render_servers_table(servers)


@mcp_app.command("test")
def test_server(
    server_id: int = typer.Argument(..., help="MCP server ID"),
) -> None:
    """Test an MCP server."""
    require_api_key()
    anyio.run(_test_server_async, server_id)


async def _test_server_async(server_id: int) -> None:
    async with create_client() as client:
        response = await send_request(client, "POST", f"/api/mcp-servers/{server_id}/test")

    if response.status_code == 404:
        console.print(f"[red]MCP server {server_id} not found.[/red]")
        raise typer.Exit(code=1)
    if response.status_code != 200:
        fail_request("test MCP server", response)

    print_probe_result(response.json())
