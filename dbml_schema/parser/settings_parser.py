"""
Settings list parser.

This module parses the attribute mini-language found between square
brackets after tables, columns and references:

    [pk, not null, default: 'now()', note: 'Sample values: 1, 2, 3']

Splitting happens on top-level commas only. Quoted spans (with backslash
escapes) and parenthesized spans are opaque, so commas and colons inside
them are preserved. Each setting is then split on its first colon.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from dbml_schema.utils.escaping import QUOTE_CHARS, is_quoted, strip_quotes

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Setting:
    """One ``key[: value]`` entry of a settings list.

    Attributes:
        key: Key as written, trimmed.
        value: Value with outer quotes stripped and escapes resolved, or
            None for a bare flag such as ``pk``.
        raw_value: Value exactly as written (trimmed), or None.

    Example:
        >>> setting = parse_setting("Default: 'now()'")
        >>> setting.name, setting.value, setting.quoted
        ('default', 'now()', True)
    """

    key: str
    value: Optional[str] = None
    raw_value: Optional[str] = None

    @property
    def name(self) -> str:
        """Lower-cased key with internal whitespace collapsed."""
        return _WHITESPACE.sub(" ", self.key.lower())

    @property
    def quoted(self) -> bool:
        """Whether the value was written in quotes."""
        return self.raw_value is not None and is_quoted(self.raw_value)

    @property
    def is_flag(self) -> bool:
        """Whether the setting has no value."""
        return self.value is None


def split_settings(content: str) -> list[str]:
    """Split settings content on top-level commas.

    Args:
        content: Text between the brackets (brackets excluded).

    Returns:
        Trimmed, non-empty setting strings.

    Example:
        >>> split_settings("pk, note: 'a, b', default: fn(1, 2)")
        ['pk', "note: 'a, b'", 'default: fn(1, 2)']
    """
    parts: list[str] = []
    current: list[str] = []
    quote_char = ""
    depth = 0
    escaped = False

    for char in content:
        if quote_char:
            current.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote_char:
                quote_char = ""
            continue

        if char in QUOTE_CHARS:
            quote_char = char
        elif char == "(":
            depth += 1
        elif char == ")" and depth > 0:
            depth -= 1
        elif char == "," and depth == 0:
            _flush(parts, current)
            current = []
            continue
        current.append(char)

    _flush(parts, current)
    return parts


def _flush(parts: list[str], current: list[str]) -> None:
    text = "".join(current).strip()
    if text:
        parts.append(text)


def parse_setting(text: str) -> Setting:
    """Parse a single setting, splitting on the first colon only.

    Args:
        text: One setting as returned by ``split_settings``.

    Returns:
        Setting object.
    """
    key, sep, rest = text.partition(":")
    if not sep:
        return Setting(key=key.strip())

    raw_value = rest.strip()
    if not raw_value:
        return Setting(key=key.strip())
    return Setting(key=key.strip(), value=strip_quotes(raw_value), raw_value=raw_value)


def parse_settings(content: str) -> list[Setting]:
    """Parse settings content into Setting objects.

    Args:
        content: Text between the brackets (brackets excluded).

    Returns:
        Settings in the order they were written.
    """
    return [parse_setting(part) for part in split_settings(content)]
