"""
Database schema model.

This module defines the DatabaseSchema class, the snapshot handed to the
surrounding editor after a parse and accepted back by the generator, and its
SchemaMetadata.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dbml_schema.models.reference import Reference
from dbml_schema.models.table import Table

DEFAULT_SCHEMA_VERSION = "1.0.0"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class SchemaMetadata:
    """Document-level metadata.

    Attributes:
        version: Schema format version.
        created: ISO-8601 creation timestamp.
        modified: ISO-8601 modification timestamp, refreshed on every parse.
        author: Optional author name.
    """

    version: str = DEFAULT_SCHEMA_VERSION
    created: str = field(default_factory=_now_iso)
    modified: str = field(default_factory=_now_iso)
    author: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "created": self.created,
            "modified": self.modified,
            "author": self.author,
        }


@dataclass
class DatabaseSchema:
    """Tables and references of one notation document.

    Attributes:
        tables: Tables in declaration order.
        references: References in declaration order (inline references are
            recorded when their column is parsed).
        metadata: Document metadata.

    Example:
        >>> schema = DatabaseSchema()
        >>> schema.get_table("users") is None
        True
    """

    tables: List[Table] = field(default_factory=list)
    references: List[Reference] = field(default_factory=list)
    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)

    def get_table(self, name: str, schema: Optional[str] = None) -> Optional[Table]:
        """Find a table by name.

        Args:
            name: Table name.
            schema: Schema qualifier. When None, the first table with the
                given name is returned regardless of its schema.

        Returns:
            Table or None if not found.
        """
        for table in self.tables:
            if table.name != name:
                continue
            if schema is None or table.schema == schema:
                return table
        return None

    def table_names(self) -> List[str]:
        """Return table names in declaration order."""
        return [table.name for table in self.tables]

    def column_count(self) -> int:
        """Return the total number of columns across all tables."""
        return sum(len(table.columns) for table in self.tables)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (for serialization).

        Returns:
            Dictionary representation of the schema.
        """
        return {
            "tables": [table.to_dict() for table in self.tables],
            "references": [ref.to_dict() for ref in self.references],
            "metadata": self.metadata.to_dict(),
        }
