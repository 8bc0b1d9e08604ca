"""
Preprocessor for notation text.

This module turns raw notation text into the sequence of meaningful lines the
structural parser consumes: blank lines and line comments are dropped, and
every remaining line keeps its original line number so diagnostics point at
the right place in the editor.
"""

from typing import List, NamedTuple

LINE_COMMENT = "//"


class SourceLine(NamedTuple):
    """A trimmed, meaningful line of input.

    Attributes:
        text: Line content with surrounding whitespace removed.
        line_number: 1-based line number in the original text.
        indent: Number of leading whitespace characters that were removed.
    """

    text: str
    line_number: int
    indent: int

    def column_of(self, offset: int = 0) -> int:
        """Return the 1-based original column of an offset into ``text``."""
        return self.indent + offset + 1


def preprocess(text: str) -> List[SourceLine]:
    """Split text into meaningful lines.

    Only comments that start a line are recognized. A ``//`` after other
    content on the same line is kept as part of that line.

    Args:
        text: Raw notation text.

    Returns:
        SourceLine objects in input order.

    Example:
        >>> preprocess("// users\\n\\nTable users {")
        [SourceLine(text='Table users {', line_number=3, indent=0)]
    """
    lines: List[SourceLine] = []
    for index, raw in enumerate(text.split("\n")):
        content = raw.strip()
        if not content or content.startswith(LINE_COMMENT):
            continue
        indent = len(raw) - len(raw.lstrip())
        lines.append(SourceLine(content, index + 1, indent))
    return lines
