"""Tests for provider, MCP, export and import CLI commands."""

import io
import json
import zipfile
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
from typer.testing import CliRunner

from ccswitch.cli import app

runner = CliRunner()


def _make_client(handler) -> httpx.AsyncClient:
    transport = httpx.MockTransport(handler)
    return httpx.AsyncClient(base_url="http://test", transport=transport)


def _patched(module: str, handler):
    client = _make_client(handler)
    return (
        patch("ccswitch.cli.client.get_api_key", return_value="key"),
        patch(f"ccswitch.cli.commands.{module}.create_client", return_value=client),
    )


@pytest.mark.parametrize(
    "argv",
    [["providers", "list"], ["mcp", "test", "1"], ["export", "claude"]],
)
def test_commands_require_api_key(argv: list[str]) -> None:
    """Commands refuse to run without an API key."""
    with patch("ccswitch.cli.client.get_api_key", return_value=None):
        result = runner.invoke(app, argv)

    assert result.exit_code == 1
    assert "API key not configured" in result.stdout


def test_providers_list() -> None:
    """List providers via CLI."""

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/providers"
        return httpx.Response(
            200,
            json=[
                {
                    "id": 1,
                    "name": "relay",
                    "provider_type": "custom",
                    "app_type": "claude",
                    "base_url": "https://r.io",
                    "enabled": True,
                },
                {
                    "id": 2,
                    "name": "codexp",
                    "provider_type": "official",
                    "app_type": "codex",
                    "base_url": None,
                    "enabled": False,
                },
            ],
        )

    key_patch, client_patch = _patched("providers", handler)
    with key_patch, client_patch:
        result = runner.invoke(app, ["providers", "list", "--tool", "claude"])

    assert result.exit_code == 0
    assert "relay" in result.stdout
    assert "codexp" not in result.stdout


def test_providers_list_empty() -> None:
    """List providers when none exist."""
    key_patch, client_patch = _patched("providers", lambda request: httpx.Response(200, json=[]))
    with key_patch, client_patch:
        result = runner.invoke(app, ["providers", "list"])

    assert result.exit_code == 0
    assert "No providers configured" in result.stdout


def test_providers_test_success_and_failure() -> None:
    """Probe results set the exit code."""

    def ok(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/api/providers/3/test"
        return httpx.Response(200, json={"success": True, "message": "Connected", "latency_ms": 12})

    key_patch, client_patch = _patched("providers", ok)
    with key_patch, client_patch:
        result = runner.invoke(app, ["providers", "test", "3"])
    assert result.exit_code == 0
    assert "Connected" in result.stdout

    def failed(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"success": False, "message": "Authentication failed", "latency_ms": 5}
        )

    key_patch, client_patch = _patched("providers", failed)
    with key_patch, client_patch:
        result = runner.invoke(app, ["providers", "test", "3"])
    assert result.exit_code == 1
    assert "Authentication failed" in result.stdout


def test_providers_test_not_found() -> None:
    """Missing providers are reported."""
    key_patch, client_patch = _patched("providers", lambda request: httpx.Response(404))
    with key_patch, client_patch:
        result = runner.invoke(app, ["providers", "test", "9"])

    assert result.exit_code == 1
    assert "not found" in result.stdout


def test_mcp_list_and_test() -> None:
    """List and test MCP servers via CLI."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/mcp-servers":
            return httpx.Response(
                200,
                json=[
                    {
                        "id": 1,
                        "name": "fs",
                        "transport_type": "stdio",
                        "command": "npx",
                        "args": ["-y"],
                        "url": None,
                        "app_bindings": ["claude"],
                        "enabled": True,
                    }
                ],
            )
        assert request.url.path == "/api/mcp-servers/1/test"
        return httpx.Response(200, json={"success": True, "message": "Configuration valid"})

    key_patch, client_patch = _patched("mcp", handler)
    with key_patch, client_patch:
        listed = runner.invoke(app, ["mcp", "list"])
    assert listed.exit_code == 0
    assert "fs" in listed.stdout

    key_patch, client_patch = _patched("mcp", handler)
    with key_patch, client_patch:
        tested = runner.invoke(app, ["mcp", "test", "1"])
    assert tested.exit_code == 0
    assert "Configuration valid" in tested.stdout


def test_export_writes_archive(tmp_path: Path) -> None:
    """Exports are saved under the server-suggested file name."""

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/export/codex"
        return httpx.Response(
            200,
            content=b"PK-data",
            headers={"Content-Disposition": 'attachment; filename="codex-export-2025-01-02.zip"'},
        )

    key_patch, client_patch = _patched("transfer", handler)
    with key_patch, client_patch:
        result = runner.invoke(app, ["export", "codex", "--output", str(tmp_path)])

    assert result.exit_code == 0
    assert (tmp_path / "codex-export-2025-01-02.zip").read_bytes() == b"PK-data"


def test_export_unknown_target() -> None:
    """Unknown export targets fail before any request."""
    result = runner.invoke(app, ["export", "cursor"])

    assert result.exit_code == 1
    assert "Unknown export target" in result.stdout


def test_import_json(tmp_path: Path) -> None:
    """JSON files are posted to the import endpoint."""
    rows = [{"provider_type": "custom", "name": "p1"}]
    path = tmp_path / "providers.json"
    path.write_text(json.dumps(rows))

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/import"
        assert json.loads(request.content) == rows
        return httpx.Response(200, json={"kind": "providers", "imported": 1, "skipped": 0})

    key_patch, client_patch = _patched("transfer", handler)
    with key_patch, client_patch:
        result = runner.invoke(app, ["import", str(path)])

    assert result.exit_code == 0
    assert "Imported 1 providers" in result.stdout


def test_import_backup_zip(tmp_path: Path) -> None:
    """Zip files are uploaded as a backup restore."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("providers.json", "[]")
    path = tmp_path / "backup.zip"
    path.write_bytes(buffer.getvalue())

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/import/backup"
        assert b"multipart/form-data" in request.headers["content-type"].encode()
        return httpx.Response(
            200,
            json=[
                {"kind": "providers", "imported": 2, "skipped": 1},
                {"kind": "prompts", "imported": 0, "skipped": 0},
            ],
        )

    key_patch, client_patch = _patched("transfer", handler)
    with key_patch, client_patch:
        result = runner.invoke(app, ["import", str(path)])

    assert result.exit_code == 0
    assert "Imported 2 providers" in result.stdout
    assert "1 skipped" in result.stdout


def test_import_invalid_json(tmp_path: Path) -> None:
    """Unreadable files are rejected locally."""
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    with patch("ccswitch.cli.client.get_api_key", return_value="key"):
        result = runner.invoke(app, ["import", str(path)])

    assert result.exit_code == 1
    assert "Invalid JSON in broken.json" in result.stdout
