"""Main CLI application using Typer."""

import typer
from rich.console import Console

from ccswitch import __version__
from ccswitch.cli.commands.config import config_app
from ccswitch.cli.commands.mcp import mcp_app
from ccswitch.cli.commands.providers import providers_app
from ccswitch.cli.commands.transfer import export_command, import_command

app = typer.Typer(
    name="ccswitch",
    help="cc-switch - configuration profiles for AI command-line tools",
    add_completion=False,
)
console = Console()

# Register subcommands
app.add_typer(config_app, name="config")
app.add_typer(providers_app, name="providers")
app.add_typer(mcp_app, name="mcp")
app.command("export")(export_command)
app.command("import")(import_command)


def version_callback(value: bool) -> None:
    """Show version information."""
    if value:
        console.print(f"cc-switch version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    )
) -> None:
    """cc-switch CLI - manage providers, MCP servers and exports."""
    pass


if __name__ == "__main__":
    app()
