"""Tests for the assembler registry."""

from ccswitch.adapters import get_assembler, list_assemblers
from ccswitch.adapters.claude_code import ClaudeCodeAssembler
from ccswitch.data.models.provider import AppType


def test_every_tool_has_an_assembler() -> None:
    """One assembler is registered per tool, in tool order."""
    assemblers = list_assemblers()

    assert [assembler.name for assembler in assemblers] == list(AppType)


def test_get_assembler_by_name() -> None:
    """Assemblers are found by tool value or enum member."""
    assert isinstance(get_assembler("claude"), ClaudeCodeAssembler)
    assert get_assembler(AppType.CODEX) is get_assembler("codex")


def test_unknown_tool() -> None:
    """Unknown tools have no assembler."""
    assert get_assembler("cursor") is None
