"""
Per-call parse state.

This module defines the ParseContext class. The structural parser creates
one context per ``parse`` call, threads it through every construct parser
and discards it afterwards, so no cursor, counter or collection survives
from one call to the next.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from dbml_schema.models.column import Column
from dbml_schema.models.config import ParserConfig
from dbml_schema.models.diagnostic import DiagnosticKind
from dbml_schema.models.reference import Reference
from dbml_schema.parser.preprocessor import SourceLine
from dbml_schema.registry.table_registry import TableRegistry
from dbml_schema.utils.diagnostics import DiagnosticCollector


@dataclass
class ParseContext:
    """Mutable state of a single parse.

    Attributes:
        lines: Preprocessed input lines.
        config: Parser configuration.
        cursor: Index into ``lines`` of the line being processed.
        registry: Tables declared so far.
        references: References accepted so far, in declaration order.
        collector: Diagnostics found so far.
        inline_references: Inline references with their column and source
            line, kept for the optional end-of-parse target check.
        features: Feature tags of recognized but unmodeled constructs.
    """

    lines: List[SourceLine]
    config: ParserConfig = field(default_factory=ParserConfig)
    cursor: int = 0
    registry: TableRegistry = field(default_factory=TableRegistry)
    references: List[Reference] = field(default_factory=list)
    collector: DiagnosticCollector = field(default_factory=DiagnosticCollector)
    inline_references: List[Tuple[Reference, Column, SourceLine]] = field(
        default_factory=list
    )
    features: List[str] = field(default_factory=list)
    _table_counter: int = 0
    _column_counter: int = 0
    _reference_counter: int = 0

    # ========== Cursor ==========

    def has_next(self) -> bool:
        """Check whether a line follows the current one."""
        return self.cursor + 1 < len(self.lines)

    @property
    def current(self) -> Optional[SourceLine]:
        """Return the current line, or the last line once past the end."""
        if not self.lines:
            return None
        return self.lines[min(self.cursor, len(self.lines) - 1)]

    def advance(self) -> SourceLine:
        """Move to the next line and return it."""
        self.cursor += 1
        return self.lines[self.cursor]

    def step_back(self) -> None:
        """Move back one line so the caller's loop reads it again."""
        self.cursor -= 1

    # ========== Identifiers ==========

    def next_table_id(self) -> str:
        table_id = f"table_{self._table_counter}"
        self._table_counter += 1
        return table_id

    def next_column_id(self) -> str:
        column_id = f"col_{self._column_counter}"
        self._column_counter += 1
        return column_id

    def next_reference_id(self) -> str:
        reference_id = f"ref_{self._reference_counter}"
        self._reference_counter += 1
        return reference_id

    # ========== Diagnostics ==========

    def error(
        self,
        kind: DiagnosticKind,
        message: str,
        line: Optional[SourceLine] = None,
        offset: int = 0,
    ) -> None:
        """Record an error at ``line`` (default: the current line).

        Args:
            kind: Diagnostic category.
            message: Message text.
            line: Line the error belongs to.
            offset: Offset of the offending token within the line content.
        """
        line_number, column = self._position(line, offset)
        self.collector.error(kind, line_number, column, message)

    def warning(
        self,
        kind: DiagnosticKind,
        message: str,
        line: Optional[SourceLine] = None,
        offset: int = 0,
    ) -> None:
        """Record a warning at ``line`` (default: the current line)."""
        line_number, column = self._position(line, offset)
        self.collector.warning(kind, line_number, column, message)

    def add_feature(self, tag: str) -> None:
        if tag not in self.features:
            self.features.append(tag)

    def _position(self, line: Optional[SourceLine], offset: int) -> Tuple[int, int]:
        line = line or self.current
        if line is None:
            return 1, 1
        return line.line_number, line.column_of(max(offset, 0))
