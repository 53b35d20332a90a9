"""Export and import CLI commands."""

import json
import zipfile
from pathlib import Path

import anyio
import typer
from rich.console import Console

from ccswitch.cli.client import (
    attachment_filename,
    create_client,
    fail_request,
    require_api_key,
    send_request,
)

console = Console()

TOOLS = ("claude", "codex", "gemini", "opencode")

OUTPUT_OPTION = typer.Option(
    Path("."), "--output", "-o", help="Directory to write the archive to"
)


def export_command(
    target: str = typer.Argument(..., help="Tool name (claude, codex, gemini, opencode) or 'backup'"),
    output: Path = OUTPUT_OPTION,
) -> None:
    """Download a tool's config archive or a full data backup."""
    if target != "backup" and target not in TOOLS:
        console.print(f"[red]Unknown export target '{target}'.[/red]")
        console.print(f"Choose one of: {', '.join((*TOOLS, 'backup'))}")
        raise typer.Exit(code=1)
    require_api_key()
    anyio.run(_export_async, target, output)


async def _export_async(target: str, output: Path) -> None:
    async with create_client() as client:
        response = await send_request(client, "GET", f"/api/export/{target}")

    if response.status_code != 200:
        fail_request(f"export {target}", response)

    filename = attachment_filename(response, f"{target}-export.zip")
    output.mkdir(parents=True, exist_ok=True)
    destination = output / filename
    destination.write_bytes(response.content)
    console.print(f"[green]✓[/green] Saved [cyan]{destination}[/cyan]")


def import_command(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON array or backup zip"),
) -> None:
    """Import an exported JSON file or restore a backup archive."""
    require_api_key()
    anyio.run(_import_async, file)


async def _import_async(file: Path) -> None:
    if zipfile.is_zipfile(file):
        async with create_client() as client:
            response = await send_request(
                client,
                "POST",
                "/api/import/backup",
                files={"file": (file.name, file.read_bytes(), "application/zip")},
            )
        if response.status_code != 200:
            fail_request("restore backup", response)
        for result in response.json():
            _print_result(result)
        return

    try:
        payload = json.loads(file.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        console.print(f"[red]Invalid JSON in {file.name}: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    async with create_client() as client:
        response = await send_request(client, "POST", "/api/import", json=payload)
    if response.status_code != 200:
        fail_request("import records", response)
    _print_result(response.json())


def _print_result(result: dict[str, object]) -> None:
    line = f"[green]✓[/green] Imported {result['imported']} {result['kind']}"
    if result.get("skipped"):
        line += f" [yellow]({result['skipped']} skipped)[/yellow]"
    console.print(line)
