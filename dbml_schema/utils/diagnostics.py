"""
Diagnostic collection for the structural parser.

This module defines the DiagnosticCollector class, which accumulates
line-scoped errors and warnings during a parse and attaches fix suggestions
to well-known messages.
"""

from __future__ import annotations

from typing import Optional

from dbml_schema.models.diagnostic import Diagnostic, DiagnosticKind, Severity

IDENTIFIER_HINT = (
    "must start with a letter or underscore and contain only letters, "
    "numbers, and underscores"
)

# Message prefix -> suggestion
SUGGESTIONS: dict[str, str] = {
    "Invalid table name": f"Table names {IDENTIFIER_HINT}",
    "Invalid schema name": f"Schema names {IDENTIFIER_HINT}",
    "Invalid column name": (
        f"Column names {IDENTIFIER_HINT}; quote the name to use other characters"
    ),
    "Duplicate table name": "Each table must have a unique name within its schema",
    "Referenced table not found": (
        "Make sure the referenced table is defined before creating references to it"
    ),
    "Referenced column not found": (
        "Make sure the column is declared in the referenced table"
    ),
    "Invalid column definition": "Columns are written as: <name> <type> [settings]",
    "Invalid reference syntax": (
        "References are written as: Ref: table.column > table.column"
    ),
    "Missing closing brace": "Close the table body with a line containing only '}'",
}


def get_suggestion(message: str) -> Optional[str]:
    """Return the suggestion registered for a message, if any.

    Args:
        message: Diagnostic message.

    Returns:
        Suggestion text or None.
    """
    for prefix, suggestion in SUGGESTIONS.items():
        if message.startswith(prefix):
            return suggestion
    return None


class DiagnosticCollector:
    """Collects errors and warnings during a parse.

    Attributes:
        diagnostics: Diagnostic objects in the order they were added.

    Example:
        >>> collector = DiagnosticCollector()
        >>> collector.warning(DiagnosticKind.UNRECOGNIZED, 2, 1, "Unrecognized syntax: ???")
        >>> collector.has_errors()
        False
        >>> collector.error(DiagnosticKind.SEMANTIC, 5, 7, "Invalid table name: 1bad")
        >>> collector.has_errors()
        True
        >>> collector.get_summary()
        {'error': 1, 'warning': 1}
    """

    def __init__(self) -> None:
        """Initialize a DiagnosticCollector."""
        self.diagnostics: list[Diagnostic] = []

    def add(
        self,
        severity: Severity,
        kind: DiagnosticKind,
        line: int,
        column: int,
        message: str,
        suggestion: Optional[str] = None,
    ) -> Diagnostic:
        """Add a diagnostic.

        When no suggestion is given, one is looked up from the message.

        Args:
            severity: ERROR or WARNING.
            kind: Diagnostic category.
            line: 1-based original line number.
            column: 1-based column.
            message: Message text.
            suggestion: Optional explicit suggestion.

        Returns:
            The Diagnostic that was added.
        """
        diagnostic = Diagnostic(
            line=line,
            column=column,
            message=message,
            severity=severity,
            kind=kind,
            suggestion=suggestion if suggestion is not None else get_suggestion(message),
        )
        self.diagnostics.append(diagnostic)
        return diagnostic

    def error(
        self, kind: DiagnosticKind, line: int, column: int, message: str
    ) -> None:
        """Add an error-level diagnostic."""
        self.add(Severity.ERROR, kind, line, column, message)

    def warning(
        self, kind: DiagnosticKind, line: int, column: int, message: str
    ) -> None:
        """Add a warning-level diagnostic."""
        self.add(Severity.WARNING, kind, line, column, message)

    def has_errors(self) -> bool:
        """Check if any error-level diagnostics exist.

        Returns:
            True if any error-level diagnostics exist, False otherwise.
        """
        return any(d.severity == Severity.ERROR for d in self.diagnostics)

    def get_all(self) -> list[Diagnostic]:
        """Get all collected diagnostics in insertion order."""
        return self.diagnostics.copy()

    def get_by_severity(self, severity: Severity) -> list[Diagnostic]:
        """Get diagnostics with the given severity, in insertion order.

        Args:
            severity: Severity to filter by.

        Returns:
            List of matching Diagnostic objects.
        """
        return [d for d in self.diagnostics if d.severity == severity]

    @property
    def errors(self) -> list[Diagnostic]:
        return self.get_by_severity(Severity.ERROR)

    @property
    def warnings(self) -> list[Diagnostic]:
        return self.get_by_severity(Severity.WARNING)

    def clear(self) -> None:
        """Clear all collected diagnostics."""
        self.diagnostics.clear()

    def get_summary(self) -> dict[str, int]:
        """Get counts of diagnostics by severity.

        Returns:
            Dictionary with ``error`` and ``warning`` counts.
        """
        summary: dict[str, int] = {"error": 0, "warning": 0}
        for diagnostic in self.diagnostics:
            summary[diagnostic.severity.value] += 1
        return summary
