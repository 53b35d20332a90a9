"""Small line-oriented TOML encoder.

Only the subset needed for tool config files is supported: comments,
blank lines, table headers, and ``key = value`` pairs whose values are
strings, booleans, integers, floats or flat arrays of those. All escaping
lives here so every caller gets the same rules.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

TomlScalar = str | bool | int | float
TomlValue = TomlScalar | Sequence[TomlScalar]

_BARE_KEY = re.compile(r"^[A-Za-z0-9_-]+$")
_UNSAFE_TABLE_CHARS = re.compile(r"[^A-Za-z0-9_-]")

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


class TomlEncodeError(ValueError):
    """Raised for values the encoder cannot represent."""


def format_string(value: str) -> str:
    """Render a TOML basic string."""
    chunks: list[str] = []
    for char in value:
        if char in _ESCAPES:
            chunks.append(_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            chunks.append(f"\\u{ord(char):04X}")
        else:
            chunks.append(char)
    return '"' + "".join(chunks) + '"'


def format_key(key: str) -> str:
    """Render a single key segment, quoting it when it is not a bare key."""
    if _BARE_KEY.match(key):
        return key
    return format_string(key)


def sanitize_table_name(name: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_-]`` with ``_``."""
    return _UNSAFE_TABLE_CHARS.sub("_", name)


def format_value(value: TomlValue) -> str:
    """Render a scalar or flat array value."""
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return format_string(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise TomlEncodeError(f"Unsupported float value: {value!r}")
        return repr(value)
    if isinstance(value, Sequence):
        return "[" + ", ".join(format_value(item) for item in value) + "]"
    raise TomlEncodeError(f"Unsupported TOML value type: {type(value).__name__}")


class TomlDocument:
    """Accumulates TOML lines in order."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def comment(self, text: str) -> TomlDocument:
        for line in text.splitlines() or [""]:
            self._lines.append(f"# {line}".rstrip())
        return self

    def blank(self) -> TomlDocument:
        self._lines.append("")
        return self

    def table(self, *path: str) -> TomlDocument:
        """Open a ``[a.b.c]`` table. Segments are used verbatim when bare."""
        header = ".".join(format_key(part) for part in path)
        self._lines.append(f"[{header}]")
        return self

    def assign(self, key: str | Sequence[str], value: TomlValue) -> TomlDocument:
        """Add ``key = value``; a sequence key becomes a dotted key."""
        parts = [key] if isinstance(key, str) else list(key)
        rendered_key = ".".join(format_key(part) for part in parts)
        self._lines.append(f"{rendered_key} = {format_value(value)}")
        return self

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def render(self) -> str:
        """Join all lines with a trailing newline."""
        return "\n".join(self._lines) + "\n"
