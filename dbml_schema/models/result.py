"""
Parse and generation result models.

This module defines ParseResult and GenerateResult with their metadata
records. Both are plain values: the parser and generator always return one
of them instead of raising.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from dbml_schema.models.diagnostic import Diagnostic
from dbml_schema.models.schema import DatabaseSchema


@dataclass
class ParseMetadata:
    """Statistics about a parse.

    Attributes:
        parse_time: Elapsed wall time in milliseconds.
        lines_processed: Number of non-blank, non-comment lines.
        features_used: Feature tags found in the document.
    """

    parse_time: float = 0.0
    lines_processed: int = 0
    features_used: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "parse_time": self.parse_time,
            "lines_processed": self.lines_processed,
            "features_used": list(self.features_used),
        }


@dataclass
class ParseResult:
    """Result of parsing notation text.

    Attributes:
        schema: Parsed tables and references.
        errors: Error diagnostics in the order they were found.
        warnings: Warning diagnostics in the order they were found.
        metadata: Parse statistics.

    Example:
        >>> from dbml_schema import parse
        >>> result = parse("Table users {\\n  id integer [pk]\\n}")
        >>> result.success
        True
        >>> result.schema.table_names()
        ['users']
    """

    schema: DatabaseSchema
    errors: list[Diagnostic] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)
    metadata: ParseMetadata = field(default_factory=ParseMetadata)

    @property
    def success(self) -> bool:
        """True when the parse produced no errors."""
        return not self.errors

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Return errors and warnings ordered by line."""
        return sorted(self.errors + self.warnings, key=lambda d: (d.line, d.column))

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary format.

        Returns:
            Dictionary representation of the result.
        """
        return {
            "schema": self.schema.to_dict(),
            "errors": [d.to_dict() for d in self.errors],
            "warnings": [d.to_dict() for d in self.warnings],
            "metadata": self.metadata.to_dict(),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Convert result to JSON string.

        Args:
            indent: JSON indentation level.

        Returns:
            JSON string representation.
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


@dataclass
class GenerateMetadata:
    """Statistics about a generation run.

    Attributes:
        tables_generated: Number of tables written.
        references_generated: Number of references written, inline and
            standalone.
        lines_generated: Number of lines in the output text.
        generation_time: Elapsed wall time in milliseconds.
    """

    tables_generated: int = 0
    references_generated: int = 0
    lines_generated: int = 0
    generation_time: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "tables_generated": self.tables_generated,
            "references_generated": self.references_generated,
            "lines_generated": self.lines_generated,
            "generation_time": self.generation_time,
        }


@dataclass
class GenerateResult:
    """Result of generating notation text from a schema.

    Attributes:
        text: Generated notation (empty when success is False).
        success: Whether generation completed.
        warnings: Messages about lossy or failed generation.
        metadata: Generation statistics.
    """

    text: str
    success: bool
    warnings: list[str] = field(default_factory=list)
    metadata: GenerateMetadata = field(default_factory=GenerateMetadata)

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "success": self.success,
            "warnings": list(self.warnings),
            "metadata": self.metadata.to_dict(),
        }
