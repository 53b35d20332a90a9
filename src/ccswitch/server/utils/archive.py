"""Zip packaging for tool exports and data backups.

Archives are deterministic: entries are written in the order given and
every entry carries the same timestamp, midnight of the export date.
"""

import io
import json
import zipfile
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

from ccswitch.adapters.base import Artifact

# Backup file name for each record collection, in archive order
BACKUP_FILES: dict[str, str] = {
    "providers": "providers.json",
    "mcp_servers": "mcp_servers.json",
    "prompts": "prompts.json",
    "skills": "skills.json",
    "skills_repos": "skills_repos.json",
}

_FILE_MODE = 0o644 << 16


def _write_entry(archive: zipfile.ZipFile, path: str, content: str | bytes, today: date) -> None:
    info = zipfile.ZipInfo(path, date_time=(today.year, today.month, today.day, 0, 0, 0))
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = _FILE_MODE
    data = content.encode("utf-8") if isinstance(content, str) else content
    archive.writestr(info, data)


def _zip(entries: Sequence[tuple[str, str | bytes]], today: date) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for path, content in entries:
            _write_entry(archive, path, content, today)
    return buffer.getvalue()


def dump_records(rows: Sequence[Mapping[str, Any]]) -> str:
    """Serialize a record collection the way backup and module files store it."""
    return json.dumps(list(rows), indent=2, ensure_ascii=False)


def tool_archive_root(tool: str, today: date) -> str:
    return f"{tool}-export-{today.isoformat()}"


def build_tool_archive(tool: str, artifact: Artifact, today: date) -> tuple[str, bytes]:
    """
    Package one tool's artifact.

    Returns:
        Suggested filename and zip bytes. Every file sits under
        ``<tool>-export-<YYYY-MM-DD>/``.
    """
    root = tool_archive_root(tool, today)
    entries = [(f"{root}/{path}", content) for path, content in artifact.files.items()]
    return f"{root}.zip", _zip(entries, today)


def build_backup_archive(
    collections: Mapping[str, Sequence[Mapping[str, Any]]], today: date
) -> tuple[str, bytes]:
    """
    Package every record collection as top-level JSON files.

    Args:
        collections: Stripped rows keyed by collection name (see BACKUP_FILES)
        today: Export date

    Returns:
        Suggested filename and zip bytes
    """
    entries = [
        (filename, dump_records(collections.get(name, [])))
        for name, filename in BACKUP_FILES.items()
    ]
    return f"cc-switch-backup-{today.isoformat()}.zip", _zip(entries, today)


def read_backup_archive(data: bytes) -> dict[str, Any]:
    """
    Load the JSON files of a backup archive.

    Only known file names are read, at the archive root or one directory
    down. Missing files are left out of the result.

    Raises:
        zipfile.BadZipFile: If ``data`` is not a zip archive
        ValueError: If a known file is not valid JSON
    """
    by_filename = {filename: name for name, filename in BACKUP_FILES.items()}
    result: dict[str, Any] = {}
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        for info in archive.infolist():
            if info.is_dir():
                continue
            parts = info.filename.split("/")
            if len(parts) > 2 or parts[-1] not in by_filename:
                continue
            result[by_filename[parts[-1]]] = json.loads(archive.read(info).decode("utf-8"))
    return result


def build_module_export(
    module: str, rows: Sequence[Mapping[str, Any]], today: date
) -> tuple[str, str]:
    """Serialize one collection as ``cc-switch-<module>-<YYYY-MM-DD>.json``."""
    return f"cc-switch-{module}-{today.isoformat()}.json", dump_records(rows)
