"""
Line classifier for notation text.

This module defines the LineClassifier class, which assigns each
preprocessed line exactly one LineKind. Dispatch in the structural parser
is driven by this classification alone, so the grammar of each construct
stays isolated in its own parse method.
"""

import re
from typing import List, Tuple

from dbml_schema.models.line_kind import LineKind

# Keyword patterns, in the order they are tried at the top level.
_TOP_LEVEL_PATTERNS: List[Tuple[LineKind, "re.Pattern[str]"]] = [
    (LineKind.TABLE, re.compile(r"^(?:Table|table)\s+\w")),
    (LineKind.REF, re.compile(r"^(?:Ref|ref)(?=[\s:])")),
    (LineKind.ENUM, re.compile(r"^(?:Enum|enum)\s+\w")),
    (LineKind.PROJECT, re.compile(r"^(?:Project|project)\s+\w")),
    (LineKind.TABLE_GROUP, re.compile(r"^(?:TableGroup|tablegroup)\s+\w")),
]

_INDEXES = re.compile(r"^(?:Indexes|indexes)\s*\{")
_NOTE = re.compile(r"^(?:Note|note)\s*:")
_BRACE = re.compile(r"^[{}]$")
# Unquoted names take any token here; identifier rules are checked later.
_COLUMN_LIKE = re.compile(
    r"""^(?:"[^"]+"|'[^']+'|[^\s\[\]{}"'][^\s\[\]"']*)\s+\S"""
)
_BLOCK_KINDS = (LineKind.TABLE, LineKind.ENUM, LineKind.PROJECT, LineKind.TABLE_GROUP)


class LineClassifier:
    """Notation line classifier.

    Responsibilities:
    1. Identify the construct a line starts
    2. Apply table-body rules inside a body, where a column may be named
       like a keyword (``table text`` is a column there)

    Usage:
        classifier = LineClassifier()
        kind = classifier.classify("Table users {")
        # LineKind.TABLE
    """

    def classify(self, text: str, in_table_body: bool = False) -> LineKind:
        """Classify one trimmed line.

        Args:
            text: Trimmed line content.
            in_table_body: Whether the line sits inside a table body.

        Returns:
            The LineKind of the line.
        """
        if _BRACE.match(text):
            return LineKind.BRACE

        if _INDEXES.match(text):
            return LineKind.INDEXES

        if in_table_body:
            return self._classify_body_line(text)

        for kind, pattern in _TOP_LEVEL_PATTERNS:
            if pattern.match(text):
                return kind

        if _NOTE.match(text):
            return LineKind.NOTE

        if _COLUMN_LIKE.match(text):
            return LineKind.COLUMN_LIKE

        return LineKind.UNKNOWN

    def opens_block(self, text: str) -> bool:
        """Check whether a line is a top-level block header ending in ``{``.

        Inside a table body such a line means the body was never closed.
        ``table text`` stays a column because it opens no block.

        Args:
            text: Trimmed line content.

        Returns:
            True for lines like ``Table b {`` or ``Enum status {``.
        """
        return text.endswith("{") and self.classify(text) in _BLOCK_KINDS

    def _classify_body_line(self, text: str) -> LineKind:
        """Classify a line inside a table body.

        Args:
            text: Trimmed line content.

        Returns:
            NOTE, COLUMN_LIKE or UNKNOWN.
        """
        if _NOTE.match(text):
            return LineKind.NOTE
        if _COLUMN_LIKE.match(text):
            return LineKind.COLUMN_LIKE
        return LineKind.UNKNOWN
