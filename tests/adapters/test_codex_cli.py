"""Tests for the Codex CLI assembler."""

import tomllib

from ccswitch.adapters.base import select_for_tool
from ccswitch.adapters.codex_cli import DEFAULT_MODEL, CodexCliAssembler, build_config_toml
from ccswitch.data.models.mcp_server import TransportType
from ccswitch.data.models.prompt import TargetFile
from ccswitch.data.models.provider import AppType, ProviderType
from ccswitch.data.records import McpServerRecord, PromptRecord, ProviderRecord


def _render(**records: object) -> str:
    return build_config_toml(select_for_tool(AppType.CODEX, **records))  # type: ignore[arg-type]


def test_assembler_properties() -> None:
    """Test assembler name properties."""
    assembler = CodexCliAssembler()
    assert assembler.name == AppType.CODEX
    assert assembler.display_name == "Codex CLI"
    assert assembler.config_file == "config.toml"
    assert assembler.prompt_file == TargetFile.AGENTS


def test_default_model_without_provider() -> None:
    """With no provider the default model is written and nothing else."""
    content = _render()

    assert content.startswith("# cc-switch - Codex CLI configuration\n")
    assert tomllib.loads(content) == {"model": DEFAULT_MODEL}


def test_stdio_server_block() -> None:
    """A stdio server becomes an mcp_servers table without env lines when env is empty."""
    server = McpServerRecord(
        name="fs",
        transport_type=TransportType.STDIO,
        command="npx",
        args=["-y", "pkg"],
        env={},
        app_bindings=[AppType.CODEX],
    )
    content = _render(mcp_servers=[server])

    assert "[mcp_servers.fs]" in content
    assert 'type = "stdio"' in content
    assert 'command = "npx"' in content
    assert 'args = ["-y", "pkg"]' in content
    assert "env." not in content


def test_remote_server_has_url_only() -> None:
    """http and sse servers are written without a type key."""
    server = McpServerRecord(
        name="docs search",
        transport_type=TransportType.HTTP,
        url="https://mcp.example.com",
        env={"API-TOKEN": 'quote"d'},
        app_bindings=[AppType.CODEX],
    )
    parsed = tomllib.loads(_render(mcp_servers=[server]))

    assert parsed["mcp_servers"] == {
        "docs_search": {"url": "https://mcp.example.com", "env": {"API-TOKEN": 'quote"d'}}
    }


def test_provider_fields_are_escaped() -> None:
    """Provider values survive a TOML round trip whatever characters they hold."""
    provider = ProviderRecord.model_validate(
        {
            "name": "relay",
            "provider_type": ProviderType.CUSTOM,
            "api_key": 'sk-"tricky"\\key\n',
            "base_url": "https://relay.example.com/v1",
            "app_type": AppType.CODEX,
            "model_config": {"model": "gpt-4.1"},
        }
    )
    parsed = tomllib.loads(_render(providers=[provider]))

    assert parsed["model"] == "gpt-4.1"
    assert parsed["api_key"] == 'sk-"tricky"\\key\n'
    assert parsed["provider_base_url"] == "https://relay.example.com/v1"


def test_claude_providers_are_ignored() -> None:
    """Providers for other tools never reach config.toml."""
    provider = ProviderRecord(name="claude relay", api_key="sk-x", app_type=AppType.CLAUDE)

    assert "sk-x" not in _render(providers=[provider])


def test_agents_md_from_active_prompt() -> None:
    """AGENTS.md is written from the active AGENTS.md prompt."""
    prompt = PromptRecord(
        name="agents", target_file=TargetFile.AGENTS, content="Be brief.", is_active=True
    )
    artifact = CodexCliAssembler().assemble(select_for_tool(AppType.CODEX, prompts=[prompt]))

    assert artifact.paths() == ["config.toml", "AGENTS.md"]
    assert artifact.files["AGENTS.md"] == "Be brief."
