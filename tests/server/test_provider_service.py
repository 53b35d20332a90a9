"""Tests for the provider and MCP server services."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.mcp_server import TransportType
from ccswitch.data.models.provider import PACKYCODE_BASE_URL, AppType, ProviderType
from ccswitch.data.models.user import User
from ccswitch.server.services.base import RecordNotFoundError
from ccswitch.server.services.mcp_servers import MCP_TEMPLATES, McpServerService
from ccswitch.server.services.providers import ProviderService


async def test_create_appends_to_display_order(session: AsyncSession, user: User) -> None:
    """New providers go to the end of the list."""
    service = ProviderService(session, user.id)
    first = await service.create_provider(name="one", base_url="https://one.example")
    second = await service.create_provider(name="two", base_url="https://two.example")

    assert (first.sort_order, second.sort_order) == (0, 1)
    assert [p.name for p in await service.list_providers()] == ["one", "two"]


async def test_official_base_url_is_derived(session: AsyncSession, user: User) -> None:
    """Official and PackyCode providers ignore the base URL they are given."""
    service = ProviderService(session, user.id)
    official = await service.create_provider(
        name="official",
        provider_type=ProviderType.OFFICIAL,
        app_type=AppType.CODEX,
        base_url="https://ignored.example",
    )
    packy = await service.create_provider(name="packy", provider_type=ProviderType.PACKYCODE)

    assert official.base_url == "https://api.openai.com/v1"
    assert packy.base_url == PACKYCODE_BASE_URL


async def test_update_rederives_or_protects_base_url(session: AsyncSession, user: User) -> None:
    """Changing the type re-derives the URL; derived URLs cannot be edited directly."""
    service = ProviderService(session, user.id)
    provider = await service.create_provider(name="p", base_url="https://custom.example")

    updated = await service.update_provider(provider.id, provider_type=ProviderType.OFFICIAL)
    assert updated is not None
    assert updated.base_url == "https://api.anthropic.com"

    unchanged = await service.update_provider(provider.id, base_url="https://evil.example")
    assert unchanged is not None
    assert unchanged.base_url == "https://api.anthropic.com"

    assert await service.update_provider(9999, name="missing") is None


async def test_duplicate_provider(session: AsyncSession, user: User) -> None:
    """Duplicates copy every setting under a new name."""
    service = ProviderService(session, user.id)
    source = await service.create_provider(
        name="relay",
        api_key="sk-1",
        base_url="https://relay.example",
        model_config={"model": "m1"},
    )

    copy = await service.duplicate_provider(source.id)

    assert copy.id != source.id
    assert copy.name == "relay (copy)"
    assert copy.api_key == "sk-1"
    assert copy.model_config == {"model": "m1"}
    assert copy.sort_order == 1
    with pytest.raises(RecordNotFoundError):
        await service.duplicate_provider(9999)


async def test_presets_and_toggles(session: AsyncSession, user: User) -> None:
    """Presets create providers; enabled flags can be flipped."""
    service = ProviderService(session, user.id)
    provider = await service.apply_preset(1)

    assert provider.provider_type == ProviderType.PACKYCODE
    disabled = await service.set_enabled(provider.id, False)
    assert disabled is not None and disabled.enabled is False

    with pytest.raises(IndexError):
        await service.apply_preset(42)
    assert await service.delete_provider(provider.id) is True
    assert await service.delete_provider(provider.id) is False


async def test_mcp_server_defaults_and_templates(session: AsyncSession, user: User) -> None:
    """Servers bind to Claude Code by default and templates are copied, not shared."""
    service = McpServerService(session, user.id)
    server = await service.create_server(name="custom", command="uvx", args=None, env=None)

    assert server.app_bindings == ["claude"]
    assert server.args == []
    assert server.env == {}

    from_template = await service.apply_template(1)
    assert from_template.name == "mcp-filesystem"
    assert from_template.transport_type == TransportType.STDIO
    assert from_template.args == ["-y", "@anthropics/mcp-filesystem", "/path"]
    assert MCP_TEMPLATES[1]["args"] == ["-y", "@anthropics/mcp-filesystem", "/path"]

    updated = await service.update_server(server.id, app_bindings=[AppType.CODEX, AppType.GEMINI])
    assert updated is not None
    assert updated.app_bindings == ["codex", "gemini"]

    with pytest.raises(IndexError):
        await service.apply_template(-1)
