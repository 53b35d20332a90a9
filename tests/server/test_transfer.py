"""Tests for record import and provider deep links."""

import base64
import json
from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.provider import AppType, ProviderType
from ccswitch.data.models.user import User
from ccswitch.data.records import ProviderRecord
from ccswitch.data.repositories import (
    McpServerRepository,
    ProviderRepository,
    SkillRepository,
)
from ccswitch.server.services.export import ExportService
from ccswitch.server.services.transfer import (
    DeepLinkError,
    ImportService,
    RecordImportError,
    build_deep_link,
    decode_deep_link,
    detect_kind,
    encode_deep_link,
)


class TestDetectKind:
    """Tests for record kind detection."""

    def test_each_kind(self) -> None:
        assert detect_kind({"provider_type": "custom", "name": "p"}) == "providers"
        assert detect_kind({"transport_type": "stdio", "name": "m"}) == "mcp_servers"
        assert detect_kind({"target_file": "CLAUDE.md", "name": "x"}) == "prompts"
        assert detect_kind({"owner": "o", "repo": "r"}) == "skills_repos"
        assert detect_kind({"installed": True, "name": "s"}) == "skills"

    def test_unrecognized(self) -> None:
        with pytest.raises(RecordImportError, match="Unrecognized"):
            detect_kind({"name": "mystery"})
        with pytest.raises(RecordImportError):
            detect_kind(["not", "an", "object"])

    def test_ambiguous(self) -> None:
        with pytest.raises(RecordImportError, match="Ambiguous"):
            detect_kind({"provider_type": "custom", "transport_type": "stdio", "name": "x"})


async def test_import_regenerates_ids(session: AsyncSession, user: User) -> None:
    """Imported rows get fresh ids and belong to the importing user."""
    payload = [
        {
            "id": 999,
            "user_id": 12345,
            "created_at": "2020-01-01T00:00:00",
            "provider_type": "custom",
            "name": "p1",
            "api_key": "sk",
            "base_url": "https://p1.example",
            "app_type": "claude",
            "model_config": {"model": "m1"},
        }
    ]

    result = await ImportService(session, user.id).import_records(payload)

    assert (result.kind, result.imported, result.skipped) == ("providers", 1, 0)
    providers = await ProviderRepository(session, user.id).list_all()
    assert len(providers) == 1
    assert providers[0].id != 999
    assert providers[0].user_id == user.id
    assert providers[0].created_at.year != 2020
    assert providers[0].model_config == {"model": "m1"}


async def test_import_skips_bad_rows(session: AsyncSession, user: User) -> None:
    """Rows that fail validation or belong to another kind are skipped."""
    payload = [
        {"transport_type": "stdio", "name": "good", "command": "npx", "app_bindings": ["codex"]},
        {"transport_type": "carrier-pigeon", "name": "bad"},
        {"provider_type": "custom", "name": "wrong kind"},
        "not an object",
        {"transport_type": "http", "name": "remote", "url": "https://m.example"},
    ]

    result = await ImportService(session, user.id).import_records(payload)

    assert (result.imported, result.skipped) == (2, 3)
    servers = await McpServerRepository(session, user.id).list_all()
    assert [s.name for s in servers] == ["good", "remote"]
    assert servers[0].app_bindings == ["codex"]


async def test_import_rejects_empty_payload(session: AsyncSession, user: User) -> None:
    """The payload must be a non-empty array."""
    service = ImportService(session, user.id)
    with pytest.raises(RecordImportError):
        await service.import_records([])
    with pytest.raises(RecordImportError):
        await service.import_records({"provider_type": "custom"})


async def test_backup_round_trip(session: AsyncSession, user: User) -> None:
    """A backup restores into another account with the same content."""
    await ProviderRepository(session, user.id).create(
        name="relay", base_url="https://r.example", model_config={"model": "m1"}
    )
    await McpServerRepository(session, user.id).create(
        name="fs", command="npx", args=["-y"], app_bindings=["claude"]
    )
    await SkillRepository(session, user.id).create(name="pdf", installed=True)
    _, data = await ExportService(session, user.id).export_backup(date(2025, 1, 2))

    from ccswitch.server.auth import create_user

    other, _ = await create_user(session, "restorer")
    results = await ImportService(session, other.id).import_backup(data)

    assert {r.kind: r.imported for r in results} == {
        "providers": 1,
        "mcp_servers": 1,
        "prompts": 0,
        "skills": 1,
        "skills_repos": 0,
    }
    restored = await ExportService(session, other.id).load_records()
    original = await ExportService(session, user.id).load_records()
    assert restored == original


async def test_backup_rejects_garbage(session: AsyncSession, user: User) -> None:
    """Non-zip uploads are rejected as a whole."""
    with pytest.raises(RecordImportError, match="Invalid backup archive"):
        await ImportService(session, user.id).import_backup(b"definitely not a zip")


class TestDeepLink:
    """Tests for deep link encoding."""

    def _providers(self) -> list[ProviderRecord]:
        return [
            ProviderRecord(
                name="Official",
                provider_type=ProviderType.OFFICIAL,
                base_url="https://api.anthropic.com",
                api_key="secret-1",
                app_type=AppType.CLAUDE,
            ),
            ProviderRecord(
                name="Relay ü",
                provider_type=ProviderType.CUSTOM,
                base_url="https://relay.example",
                api_key="secret-2",
                app_type=AppType.CODEX,
            ),
            ProviderRecord(name="Off", api_key="secret-3", enabled=False),
        ]

    def test_round_trip_without_keys(self) -> None:
        data = encode_deep_link(self._providers())

        assert decode_deep_link(data) == [
            {
                "name": "Official",
                "provider_type": "official",
                "base_url": "https://api.anthropic.com",
                "app_type": "claude",
            },
            {
                "name": "Relay ü",
                "provider_type": "custom",
                "base_url": "https://relay.example",
                "app_type": "codex",
            },
        ]
        assert "secret" not in base64.b64decode(data).decode()

    def test_link_shape(self) -> None:
        link = build_deep_link("https://ccswitch.example/", self._providers())

        assert link.startswith("https://ccswitch.example/import?data=")
        assert "+" not in link.split("data=", 1)[1]

    def test_plus_signs_turned_into_spaces(self) -> None:
        data = encode_deep_link(self._providers())

        assert decode_deep_link(data.replace("+", " ")) == decode_deep_link(data)

    def test_non_array_and_extra_fields(self) -> None:
        as_object = base64.b64encode(b"%7B%22a%22%3A1%7D").decode()
        assert decode_deep_link(as_object) == []

        raw = json.dumps([{"name": "x", "api_key": "leak", "provider_type": "custom"}])
        encoded = base64.b64encode(raw.encode()).decode()
        assert decode_deep_link(encoded) == [
            {"name": "x", "provider_type": "custom", "base_url": None, "app_type": None}
        ]

    @pytest.mark.parametrize("data", ["%%%not-base64%%%", base64.b64encode(b"{oops").decode()])
    def test_malformed(self, data: str) -> None:
        with pytest.raises(DeepLinkError, match="invalid import link"):
            decode_deep_link(data)


async def test_import_deep_link(session: AsyncSession, user: User) -> None:
    """Deep link providers are inserted in order with derived URLs and no keys."""
    raw = json.dumps(
        [
            {"name": "A", "provider_type": "official", "base_url": None, "app_type": "codex"},
            {"name": "", "provider_type": "custom", "base_url": None, "app_type": "claude"},
            {"name": "B", "provider_type": "custom", "base_url": "https://b.example", "app_type": "claude"},
        ]
    )
    data = base64.b64encode(raw.encode()).decode()

    result = await ImportService(session, user.id).import_deep_link(data)

    assert (result.imported, result.skipped) == (2, 1)
    providers = await ProviderRepository(session, user.id).list_all()
    assert [(p.name, p.sort_order, p.base_url, p.api_key) for p in providers] == [
        ("A", 0, "https://api.openai.com/v1", None),
        ("B", 1, "https://b.example", None),
    ]
