"""Async HTTP client helpers for the CLI."""

from __future__ import annotations

import re
from typing import Any, NoReturn

import httpx
import typer
from rich.console import Console

from ccswitch.cli.config import get_config_value

DEFAULT_SERVER_URL = "http://localhost:8000"

console = Console()

_FILENAME = re.compile(r'filename="?([^";]+)"?')


def get_server_url() -> str:
    """Return the configured server URL."""
    return str(get_config_value("server_url", DEFAULT_SERVER_URL))


def get_api_key() -> str | None:
    """Return the configured API key, if any."""
    api_key = get_config_value("api_key")
    if api_key is None:
        return None
    return str(api_key)


def require_api_key() -> None:
    """Exit with setup instructions when no API key is stored."""
    if not get_api_key():
        console.print("[red]API key not configured.[/red] Set it with:")
        console.print("  ccswitch config set api_key <key>")
        raise typer.Exit(code=1)


def create_client(timeout: float = 30.0) -> httpx.AsyncClient:
    """Create an async HTTP client with configured base URL and headers."""
    headers: dict[str, str] = {}
    api_key = get_api_key()
    if api_key:
        headers["X-API-Key"] = api_key

    return httpx.AsyncClient(base_url=get_server_url(), headers=headers, timeout=timeout)


async def send_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    **kwargs: Any,
) -> httpx.Response:
    """Send a request, exiting with a readable message when the server is unreachable."""
    try:
        return await client.request(method, url, **kwargs)
    except httpx.RequestError as exc:
        console.print(f"[red]Unable to reach server at {get_server_url()}.[/red]")
        console.print(f"[dim]{exc}[/dim]")
        raise typer.Exit(code=1) from exc


def fail_request(action: str, response: httpx.Response) -> NoReturn:
    """Report a failed request and exit."""
    console.print(f"[red]Failed to {action} ({response.status_code}).[/red]")
    if response.text:
        console.print(response.text)
    raise typer.Exit(code=1)


def attachment_filename(response: httpx.Response, fallback: str) -> str:
    """File name from a Content-Disposition header."""
    match = _FILENAME.search(response.headers.get("content-disposition", ""))
    return match.group(1) if match else fallback
