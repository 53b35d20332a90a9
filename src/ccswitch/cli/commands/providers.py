"""Provider CLI commands."""

from typing import Any

import anyio
import typer
from rich.console import Console
from rich.table import Table

from ccswitch.cli.client import create_client, fail_request, require_api_key, send_request

providers_app = typer.Typer(name="providers", help="List and test providers")
console = Console()


def _render_providers_table(providers: list[dict[str, Any]]) -> None:
    table = Table(title="Providers", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Type", style="yellow")
    table.add_column("Tool", style="blue")
    table.add_column("Base URL", style="white")
    table.add_column("Enabled")

    for provider in providers:
        table.add_row(
            str(provider["id"]),
            str(provider["name"]),
            str(provider["provider_type"]),
            str(provider["app_type"]),
            str(provider.get("base_url") or "-"),
            "[green]yes[/green]" if provider.get("enabled") else "[dim]no[/dim]",
        )

    console.print(table)


@providers_app.command("list")
def list_providers(
    app_type: str | None = typer.Option(None, "--tool", "-t", help="Only this tool"),
) -> None:
    """List providers."""
    require_api_key()
    anyio.run(_list_providers_async, app_type)


async def _list_providers_async(app_type: str | None) -> None:
    async with create_client() as client:
        response = await send_request(client, "GET", "/api/providers")

    if response.status_code != 200:
        fail_request("list providers", response)

    providers = response.json()
    if app_type:
        providers = [p for p in providers if p.get("app_type") == app_type]
    if not providers:
        console.print("No providers configured.")
        return
    _render_providers_table(providers)


@providers_app.command("test")
def test_provider(
    provider_id: int = typer.Argument(..., help="Provider ID"),
) -> None:
    """Test a provider's endpoint."""
    require_api_key()
    anyio.run(_test_provider_async, provider_id)


async def _test_provider_async(provider_id: int) -> None:
    async with create_client() as client:
        response = await send_request(client, "POST", f"/api/providers/{provider_id}/test")

    if response.status_code == 404:
        console.print(f"[red]Provider {provider_id} not found.[/red]")
        raise typer.Exit(code=1)
    if response.status_code != 200:
        fail_request("test provider", response)

    print_probe_result(response.json())


def print_probe_result(result: dict[str, Any]) -> None:
    """Print a connection test result; exit non-zero on failure."""
    latency = result.get("latency_ms")
    suffix = f" [dim]({latency} ms)[/dim]" if latency is not None else ""
    if result.get("success"):
        console.print(f"[green]✓[/green] {result.get('message')}{suffix}")
        return
    console.print(f"[red]✗[/red] {result.get('message')}{suffix}")
    raise typer.Exit(code=1)
