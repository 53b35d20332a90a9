"""Tests for CLI configuration commands."""

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from ccswitch.cli import app
from ccswitch.cli.client import DEFAULT_SERVER_URL, get_server_url

runner = CliRunner()


@pytest.fixture
def config_dir(tmp_path: Path) -> Iterator[Path]:
    """Point the CLI config at a temporary directory."""
    directory = tmp_path / "config" / "ccswitch"
    directory.mkdir(parents=True)
    with patch("ccswitch.cli.config.get_config_dir", return_value=directory):
        yield directory


def test_version() -> None:
    """--version prints the version and exits."""
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert "cc-switch version" in result.stdout


def test_config_show_empty(config_dir: Path) -> None:
    """An empty config says so."""
    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    assert "No configuration found" in result.stdout


def test_config_set_and_show(config_dir: Path) -> None:
    """Values are written to config.json and the API key is masked."""
    assert runner.invoke(app, ["config", "set", "api_key", "abcdefghijklmnop"]).exit_code == 0
    assert runner.invoke(app, ["config", "set", "server_url", "http://srv:9000"]).exit_code == 0

    config_file = config_dir / "config.json"
    assert json.loads(config_file.read_text()) == {
        "api_key": "abcdefghijklmnop",
        "server_url": "http://srv:9000",
    }
    assert config_file.stat().st_mode & 0o777 == 0o600
    assert get_server_url() == "http://srv:9000"

    result = runner.invoke(app, ["config", "show"])
    assert "abcd...mnop" in result.stdout
    assert "abcdefghijklmnop" not in result.stdout


def test_config_set_unknown_key_warns(config_dir: Path) -> None:
    """Unknown keys are stored with a warning."""
    result = runner.invoke(app, ["config", "set", "colour", "blue"])

    assert result.exit_code == 0
    assert "Unknown key" in result.stdout


def test_default_server_url(config_dir: Path) -> None:
    """Without configuration the local server is used."""
    assert get_server_url() == DEFAULT_SERVER_URL
