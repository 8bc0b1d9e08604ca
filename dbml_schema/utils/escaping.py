"""
String quoting and escaping helpers.

The generator and the parser share these helpers so that escaping is
symmetric: whatever ``escape_string`` writes, ``unescape_string`` reads back
unchanged, including embedded newlines and quotes.
"""

from __future__ import annotations

import re

QUOTE_CHARS = ("'", '"', "`")

_ESCAPE_SEQUENCE = re.compile(r"\\(.)", re.DOTALL)

_UNESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


def escape_string(value: str) -> str:
    """Escape a value for use inside single quotes.

    Backslashes and single quotes are backslash-escaped, literal newlines and
    carriage returns become ``\\n`` and ``\\r``.

    Args:
        value: Raw string.

    Returns:
        Escaped string, without surrounding quotes.

    Example:
        >>> escape_string("User's table")
        "User\\\\'s table"
    """
    return (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def unescape_string(value: str) -> str:
    """Reverse ``escape_string``.

    Unknown escape sequences are kept verbatim, backslash included.

    Args:
        value: Escaped string without surrounding quotes.

    Returns:
        Raw string.
    """

    def _replace(match: re.Match) -> str:
        char = match.group(1)
        return _UNESCAPES.get(char, match.group(0))

    return _ESCAPE_SEQUENCE.sub(_replace, value)


def is_quoted(value: str) -> bool:
    """Check whether a value is wrapped in a matching pair of quotes.

    Args:
        value: Candidate string.

    Returns:
        True if the first and last characters are the same quote character.
    """
    return len(value) >= 2 and value[0] in QUOTE_CHARS and value[-1] == value[0]


def strip_quotes(value: str) -> str:
    """Remove one pair of outer quotes and resolve escapes inside them.

    Inner quotes are preserved. Unquoted values are returned unchanged.

    Args:
        value: Raw setting value.

    Returns:
        Value without outer quotes.

    Example:
        >>> strip_quotes("'Sample values: 1, 2, 3'")
        'Sample values: 1, 2, 3'
        >>> strip_quotes("0.00")
        '0.00'
    """
    if is_quoted(value):
        return unescape_string(value[1:-1])
    return value


def quote(value: str) -> str:
    """Wrap a value in single quotes, escaping it first."""
    return f"'{escape_string(value)}'"
