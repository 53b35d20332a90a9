"""Config assembler registry."""

from __future__ import annotations

import contextlib
import importlib
import pkgutil
from pathlib import Path

from ccswitch.adapters.base import ToolAssembler
from ccswitch.data.models.provider import AppType

_ASSEMBLERS: dict[AppType, ToolAssembler] = {}
_AUTO_DISCOVERED = False

# Modules in this package that do not define an assembler
_SUPPORT_MODULES = frozenset({"base", "registry", "mcp", "toml_writer", "__init__"})


def register_assembler(assembler: ToolAssembler) -> None:
    """Register a config assembler."""
    _ASSEMBLERS[assembler.name] = assembler


def get_assembler(name: AppType | str) -> ToolAssembler | None:
    """Return the assembler for a tool, or None for unknown tools."""
    _ensure_auto_discovery()
    try:
        app_type = AppType(name)
    except ValueError:
        return None
    return _ASSEMBLERS.get(app_type)


def list_assemblers() -> list[ToolAssembler]:
    """List registered assemblers in tool order."""
    _ensure_auto_discovery()
    return [_ASSEMBLERS[app] for app in AppType if app in _ASSEMBLERS]


def _ensure_auto_discovery() -> None:
    """Ensure assemblers have been auto-discovered."""
    global _AUTO_DISCOVERED
    if not _AUTO_DISCOVERED:
        _auto_discover_assemblers()
        _AUTO_DISCOVERED = True


def _auto_discover_assemblers() -> None:
    """Import every assembler module in this package so it registers itself."""
    adapters_dir = Path(__file__).parent

    for module_info in pkgutil.iter_modules([str(adapters_dir)]):
        module_name = module_info.name
        if module_name in _SUPPORT_MODULES:
            continue

        with contextlib.suppress(ImportError):
            importlib.import_module(f"ccswitch.adapters.{module_name}")
