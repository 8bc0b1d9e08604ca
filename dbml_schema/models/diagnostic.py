"""
Diagnostic model.

This module defines the Diagnostic class together with the Severity and
DiagnosticKind enums. Every problem the parser finds in its input is
reported as a Diagnostic instead of an exception.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Severity(str, Enum):
    """Diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"


class DiagnosticKind(Enum):
    """Diagnostic taxonomy.

    - STRUCTURAL: a line does not match the grammar of its construct.
    - SEMANTIC: invalid identifier, duplicate table, unresolved reference.
    - UNSUPPORTED_CONSTRUCT: recognized keyword whose content is not modeled.
    - UNKNOWN_SETTING: settings key outside the known vocabulary.
    - UNRECOGNIZED: a line that matches no construct at all.
    - INTERNAL: unexpected failure; parsing stopped at this line.
    """

    STRUCTURAL = "structural"
    SEMANTIC = "semantic"
    UNSUPPORTED_CONSTRUCT = "unsupported_construct"
    UNKNOWN_SETTING = "unknown_setting"
    UNRECOGNIZED = "unrecognized"
    INTERNAL = "internal"


@dataclass
class Diagnostic:
    """A line-scoped error or warning.

    Attributes:
        line: 1-based line number in the original text.
        column: 1-based column in the original line.
        message: Human-readable message.
        severity: ERROR or WARNING.
        kind: Category of the problem.
        suggestion: Optional hint on how to fix it.

    Example:
        >>> d = Diagnostic(
        ...     line=3,
        ...     column=1,
        ...     message="Invalid table name: 1bad",
        ...     severity=Severity.ERROR,
        ...     kind=DiagnosticKind.SEMANTIC,
        ... )
        >>> d.is_error()
        True
    """

    line: int
    column: int
    message: str
    severity: Severity
    kind: DiagnosticKind
    suggestion: Optional[str] = None

    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def format(self) -> str:
        """Return ``line:column: severity: message`` for display."""
        return f"{self.line}:{self.column}: {self.severity.value}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation of the Diagnostic.
        """
        result: Dict[str, Any] = {
            "line": self.line,
            "column": self.column,
            "message": self.message,
            "severity": self.severity.value,
            "kind": self.kind.value,
        }
        if self.suggestion is not None:
            result["suggestion"] = self.suggestion
        return result
