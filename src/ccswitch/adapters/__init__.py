"""Config assemblers - one per supported command-line tool."""

from ccswitch.adapters.base import (
    Artifact,
    ConfigSelection,
    ToolAssembler,
    select_for_tool,
)
from ccswitch.adapters.registry import get_assembler, list_assemblers

__all__ = [
    "Artifact",
    "ConfigSelection",
    "ToolAssembler",
    "get_assembler",
    "list_assemblers",
    "select_for_tool",
]
