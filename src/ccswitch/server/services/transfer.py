"""Import of exported records, backup archives and provider deep links."""

import base64
import binascii
import json
import logging
import zipfile
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Annotated, Any, Union
from urllib.parse import quote, unquote

from pydantic import Discriminator, Tag, TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.provider import derive_base_url
from ccswitch.data.records import (
    McpServerRecord,
    PromptRecord,
    ProviderRecord,
    RecordBase,
    SkillRecord,
    SkillsRepoRecord,
    strip_internal_fields,
)
from ccswitch.data.repositories import (
    McpServerRepository,
    PromptRepository,
    ProviderRepository,
    SkillRepository,
    SkillsRepoRepository,
)
from ccswitch.data.repositories.base import UserScopedRepository
from ccswitch.server.services.base import UserScopedService
from ccswitch.server.utils.archive import BACKUP_FILES, read_backup_archive

logger = logging.getLogger(__name__)

# Fields whose presence identifies the kind of an exported row
KIND_DISCRIMINATORS: dict[str, tuple[str, ...]] = {
    "providers": ("provider_type",),
    "mcp_servers": ("transport_type",),
    "prompts": ("target_file",),
    "skills_repos": ("owner", "repo"),
    "skills": ("installed",),
}

RECORD_TYPES: dict[str, type[RecordBase]] = {
    "providers": ProviderRecord,
    "mcp_servers": McpServerRecord,
    "prompts": PromptRecord,
    "skills_repos": SkillsRepoRecord,
    "skills": SkillRecord,
}

# Skill rows lose their repository link: repository ids do not survive an export
_KIND_EXTRA_FIELDS: dict[str, frozenset[str]] = {"skills": frozenset({"repo_id"})}

DEEP_LINK_FIELDS = ("name", "provider_type", "base_url", "app_type")

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


class RecordImportError(Exception):
    """Raised when an import payload is malformed as a whole."""

    pass


class DeepLinkError(Exception):
    """Raised when a deep link cannot be decoded."""

    def __init__(self, message: str = "invalid import link") -> None:
        super().__init__(message)


def matching_kinds(row: dict[str, Any]) -> list[str]:
    """Kinds whose discriminating fields are all present in ``row``."""
    return [
        kind
        for kind, fields in KIND_DISCRIMINATORS.items()
        if all(field in row for field in fields)
    ]


def record_kind(value: Any) -> str | None:
    """
    Discriminator for exported rows.

    Returns None, which fails validation, when a row matches no kind or
    more than one.
    """
    if isinstance(value, dict):
        kinds = matching_kinds(value)
        return kinds[0] if len(kinds) == 1 else None
    for kind, record_type in RECORD_TYPES.items():
        if isinstance(value, record_type):
            return kind
    return None


ExportedRow = Annotated[
    Union[
        Annotated[ProviderRecord, Tag("providers")],
        Annotated[McpServerRecord, Tag("mcp_servers")],
        Annotated[PromptRecord, Tag("prompts")],
        Annotated[SkillsRepoRecord, Tag("skills_repos")],
        Annotated[SkillRecord, Tag("skills")],
    ],
    Discriminator(record_kind),
]

_ROW_ADAPTER: TypeAdapter[RecordBase] = TypeAdapter(ExportedRow)


def detect_kind(sample: Any) -> str:
    """
    Decide which kind of record a payload holds from its first element.

    Raises:
        RecordImportError: If the sample matches no kind or several
    """
    if not isinstance(sample, dict):
        raise RecordImportError("Import rows must be JSON objects")
    kinds = matching_kinds(sample)
    if not kinds:
        raise RecordImportError("Unrecognized record format")
    if len(kinds) > 1:
        raise RecordImportError(f"Ambiguous record format: matches {', '.join(kinds)}")
    return kinds[0]


def record_to_columns(record: RecordBase) -> dict[str, Any]:
    """Column values for inserting a record."""
    columns = record.model_dump(by_alias=True)
    if isinstance(record, McpServerRecord):
        columns["app_bindings"] = [app.value for app in record.app_bindings]
    return columns


@dataclass(frozen=True)
class ImportResult:
    """Outcome of importing one collection."""

    kind: str
    imported: int
    skipped: int


def encode_deep_link(providers: Iterable[ProviderRecord]) -> str:
    """
    Encode the shareable fields of enabled providers.

    The JSON array is URI-component encoded, then base64 encoded. API keys
    are never included.
    """
    payload = [
        {
            "name": provider.name,
            "provider_type": provider.provider_type.value,
            "base_url": provider.base_url,
            "app_type": provider.app_type.value,
        }
        for provider in providers
        if provider.enabled
    ]
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(quote(text, safe=_URI_COMPONENT_SAFE).encode("ascii")).decode("ascii")


def build_deep_link(origin: str, providers: Iterable[ProviderRecord]) -> str:
    """Build ``<origin>/import?data=<encoded providers>``."""
    data = quote(encode_deep_link(providers), safe="")
    return f"{origin.rstrip('/')}/import?data={data}"


def decode_deep_link(data: str) -> list[dict[str, Any]]:
    """
    Reverse ``encode_deep_link``.

    Non-array payloads decode to an empty list. Only the shareable provider
    fields of each entry are kept.

    Raises:
        DeepLinkError: For any malformed input
    """
    # query strings turn "+" into spaces
    cleaned = data.strip().replace(" ", "+")
    try:
        raw = base64.b64decode(cleaned, validate=True).decode("ascii")
        decoded = json.loads(unquote(raw, errors="strict"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise DeepLinkError() from e

    if not isinstance(decoded, list):
        return []
    return [
        {field: item.get(field) for field in DEEP_LINK_FIELDS}
        for item in decoded
        if isinstance(item, dict)
    ]


class ImportService(UserScopedService):
    """Inserts imported rows for one user, one savepoint per row."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        super().__init__(session, user_id)
        self.repos: dict[str, UserScopedRepository[Any]] = {
            "providers": ProviderRepository(session, user_id),
            "mcp_servers": McpServerRepository(session, user_id),
            "prompts": PromptRepository(session, user_id),
            "skills_repos": SkillsRepoRepository(session, user_id),
            "skills": SkillRepository(session, user_id),
        }

    async def _insert(self, kind: str, record: RecordBase, **overrides: Any) -> None:
        columns = {**record_to_columns(record), **overrides}
        async with self.session.begin_nested():
            await self.repos[kind].stage(**columns)

    async def _import_rows(
        self, kind: str, rows: Sequence[Any], *, detect_each: bool
    ) -> ImportResult:
        hidden = _KIND_EXTRA_FIELDS.get(kind, frozenset())
        imported = 0
        skipped = 0
        for index, row in enumerate(rows):
            try:
                if not isinstance(row, dict):
                    raise ValueError("row is not a JSON object")
                cleaned = strip_internal_fields(row, hidden)
                if detect_each:
                    record = _ROW_ADAPTER.validate_python(cleaned)
                    if record_kind(record) != kind:
                        raise ValueError(f"row is not a {kind} record")
                else:
                    record = RECORD_TYPES[kind].model_validate(cleaned)
                await self._insert(kind, record)
            except (ValidationError, ValueError, SQLAlchemyError) as e:
                logger.warning(f"Skipped {kind} row {index}: {e}")
                skipped += 1
                continue
            imported += 1

        await self.session.commit()
        logger.info(
            f"Imported {imported} {kind} rows for user {self.user_id} ({skipped} skipped)"
        )
        return ImportResult(kind=kind, imported=imported, skipped=skipped)

    async def import_records(self, payload: Any) -> ImportResult:
        """
        Import a previously exported JSON array of one record kind.

        Raises:
            RecordImportError: If the payload is not a non-empty array of a
                recognizable kind
        """
        if not isinstance(payload, list) or not payload:
            raise RecordImportError("Import data must be a non-empty JSON array")
        kind = detect_kind(payload[0])
        return await self._import_rows(kind, payload, detect_each=True)

    async def import_backup(self, data: bytes) -> list[ImportResult]:
        """
        Import every known collection of a backup archive.

        Raises:
            RecordImportError: If the archive or one of its files is unreadable
        """
        try:
            collections = read_backup_archive(data)
        except (zipfile.BadZipFile, ValueError) as e:
            raise RecordImportError(f"Invalid backup archive: {e}") from e

        results = []
        for kind in BACKUP_FILES:
            rows = collections.get(kind)
            if rows is None:
                continue
            if not isinstance(rows, list):
                raise RecordImportError(f"{BACKUP_FILES[kind]} must hold a JSON array")
            results.append(await self._import_rows(kind, rows, detect_each=False))
        return results

    async def import_deep_link(self, data: str) -> ImportResult:
        """
        Insert the providers carried by a deep link.

        Imported providers are ordered by their position among the rows
        that were inserted.

        Raises:
            DeepLinkError: If the link cannot be decoded
        """
        imported = 0
        skipped = 0
        for index, item in enumerate(decode_deep_link(data)):
            try:
                record = ProviderRecord.model_validate(item)
                base_url = derive_base_url(record.provider_type, record.app_type, record.base_url)
                await self._insert("providers", record, sort_order=imported, base_url=base_url)
            except (ValidationError, SQLAlchemyError) as e:
                logger.warning(f"Skipped deep link provider {index}: {e}")
                skipped += 1
                continue
            imported += 1

        await self.session.commit()
        logger.info(f"Imported {imported} providers from deep link for user {self.user_id}")
        return ImportResult(kind="providers", imported=imported, skipped=skipped)
