"""
Table model.

This module defines the Table class, which represents a table declaration
with its ordered columns, optional schema qualifier and note, and the
layout hints that the surrounding editor attaches to it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dbml_schema.models.column import Column, CustomProperties


@dataclass
class Table:
    """A table declaration.

    Attributes:
        id: Identifier unique within one parse result (e.g. "table_0").
        name: Table name (identifier).
        schema: Optional schema qualifier written as ``schema.name``.
        columns: Columns in declaration order. Order is significant and is
            preserved by the generator.
        note: Table note, from a ``Note:`` body line or a ``note`` setting.
        position: Opaque layout hint owned by the editor, never examined.
        size: Opaque layout hint owned by the editor, never examined.
        custom_properties: Table settings outside the known vocabulary.

    Example:
        >>> table = Table(id="table_0", name="users", schema="public")
        >>> table.qualified_name
        'public.users'
    """

    id: str
    name: str
    schema: Optional[str] = None
    columns: List[Column] = field(default_factory=list)
    note: Optional[str] = None
    position: Optional[Dict[str, float]] = None
    size: Optional[Dict[str, float]] = None
    custom_properties: CustomProperties = field(default_factory=dict)

    @property
    def qualified_name(self) -> str:
        """Return ``schema.name`` or just ``name`` when unqualified."""
        if self.schema:
            return f"{self.schema}.{self.name}"
        return self.name

    @property
    def key(self) -> tuple:
        """Return the (schema, name) pair that must be unique per parse."""
        return (self.schema, self.name)

    def add_column(self, column: Column) -> None:
        """Append a column, keeping declaration order.

        Args:
            column: Column to append.
        """
        self.columns.append(column)

    def get_column(self, name: str) -> Optional[Column]:
        """Get the first column with the given name.

        Args:
            name: Column name.

        Returns:
            Column or None if the table has no such column.
        """
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def has_column(self, name: str) -> bool:
        """Check if a column exists.

        Args:
            name: Column name.

        Returns:
            True if column exists, False otherwise.
        """
        return self.get_column(name) is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation of the Table.
        """
        return {
            "id": self.id,
            "name": self.name,
            "schema": self.schema,
            "columns": [column.to_dict() for column in self.columns],
            "note": self.note,
            "position": self.position,
            "size": self.size,
            "custom_properties": dict(self.custom_properties),
        }
