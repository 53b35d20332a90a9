"""``ccswitch config`` commands."""

import typer
from rich.console import Console
from rich.table import Table

from ccswitch.cli.config import get_config_file, load_config, set_config_value

config_app = typer.Typer(name="config", help="Show or change CLI settings")
console = Console()

KNOWN_KEYS = ("server_url", "api_key")


def _mask(key: str, value: object) -> str:
    text = str(value)
    if key == "api_key" and len(text) > 8:
        return f"{text[:4]}...{text[-4:]}"
    return text


@config_app.command("show")
def config_show() -> None:
    """Print every stored setting, with the API key masked."""
    config = load_config()
    if not config:
        console.print("[yellow]No configuration found.[/yellow]")
        console.print(f"Config file: [dim]{get_config_file()}[/dim]")
        return

    table = Table(title="cc-switch Configuration", header_style="bold magenta")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    for key, value in sorted(config.items()):
        table.add_row(key, _mask(key, value))

    console.print(table)
    console.print(f"\nConfig file: [dim]{get_config_file()}[/dim]")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Setting name: server_url or api_key"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Store a setting.

    Examples:
        ccswitch config set server_url http://localhost:8000
        ccswitch config set api_key <key printed by the server>
    """
    if key not in KNOWN_KEYS:
        console.print(f"[yellow]Unknown key '{key}'; known keys: {', '.join(KNOWN_KEYS)}[/yellow]")
    set_config_value(key, value)
    console.print(f"[green]✓[/green] {key} = {_mask(key, value)}")
