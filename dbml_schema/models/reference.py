"""
Reference model.

This module defines the Reference class and the RelationshipType enum. A
reference links a "from" column to a "to" column and carries the cardinality
derived from the relationship symbol it was written with.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class RelationshipType(Enum):
    """Relationship cardinality.

    Each member maps to exactly one symbol of the notation:

    - ONE_TO_ONE: ``-``
    - ONE_TO_MANY: ``>``
    - MANY_TO_ONE: ``<``
    - MANY_TO_MANY: ``<>``
    """

    ONE_TO_ONE = "one-to-one"
    ONE_TO_MANY = "one-to-many"
    MANY_TO_ONE = "many-to-one"
    MANY_TO_MANY = "many-to-many"

    @classmethod
    def from_symbol(cls, symbol: str) -> "RelationshipType":
        """Derive the relationship type from a symbol.

        The presence of both ``<`` and ``>`` wins over either alone, so
        ``<>`` is many-to-many. Anything without an angle bracket is
        one-to-one.

        Args:
            symbol: Relationship symbol as written (e.g. ">", "<>", "-").

        Returns:
            The matching RelationshipType.

        Example:
            >>> RelationshipType.from_symbol("<>")
            <RelationshipType.MANY_TO_MANY: 'many-to-many'>
        """
        if "<" in symbol and ">" in symbol:
            return cls.MANY_TO_MANY
        if "<" in symbol:
            return cls.MANY_TO_ONE
        if ">" in symbol:
            return cls.ONE_TO_MANY
        return cls.ONE_TO_ONE

    @property
    def symbol(self) -> str:
        """Return the notation symbol for this relationship type."""
        return _SYMBOLS[self]


_SYMBOLS = {
    RelationshipType.ONE_TO_ONE: "-",
    RelationshipType.ONE_TO_MANY: ">",
    RelationshipType.MANY_TO_ONE: "<",
    RelationshipType.MANY_TO_MANY: "<>",
}

# Referential actions accepted for ``delete:`` / ``update:`` settings.
REFERENTIAL_ACTIONS = ("cascade", "restrict", "set null", "set default", "no action")


@dataclass
class Reference:
    """A relationship between two columns.

    Attributes:
        id: Identifier unique within one parse result (e.g. "ref_0").
        from_table: Name of the table holding the foreign key column.
        from_column: Name of the foreign key column.
        to_table: Name of the referenced table.
        to_column: Name of the referenced column.
        type: Cardinality derived from the relationship symbol.
        name: Optional reference name (``Ref name: ...``).
        on_delete: Optional referential action for deletes.
        on_update: Optional referential action for updates.
        from_schema: Optional schema qualifier of ``from_table``.
        to_schema: Optional schema qualifier of ``to_table``.
        inline: True when declared through a column's ``ref:`` setting.

    Example:
        >>> ref = Reference(
        ...     id="ref_0",
        ...     from_table="posts",
        ...     from_column="user_id",
        ...     to_table="users",
        ...     to_column="id",
        ...     type=RelationshipType.ONE_TO_MANY,
        ... )
        >>> ref.to_endpoint()
        'users.id'
    """

    id: str
    from_table: str
    from_column: str
    to_table: str
    to_column: str
    type: RelationshipType = RelationshipType.ONE_TO_MANY
    name: Optional[str] = None
    on_delete: Optional[str] = None
    on_update: Optional[str] = None
    from_schema: Optional[str] = None
    to_schema: Optional[str] = None
    inline: bool = False

    def from_endpoint(self) -> str:
        """Return the "from" side as ``[schema.]table.column``."""
        return _endpoint(self.from_schema, self.from_table, self.from_column)

    def to_endpoint(self) -> str:
        """Return the "to" side as ``[schema.]table.column``."""
        return _endpoint(self.to_schema, self.to_table, self.to_column)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation of the Reference.
        """
        return {
            "id": self.id,
            "name": self.name,
            "from_schema": self.from_schema,
            "from_table": self.from_table,
            "from_column": self.from_column,
            "to_schema": self.to_schema,
            "to_table": self.to_table,
            "to_column": self.to_column,
            "type": self.type.value,
            "on_delete": self.on_delete,
            "on_update": self.on_update,
            "inline": self.inline,
        }


def _endpoint(schema: Optional[str], table: str, column: str) -> str:
    if schema:
        return f"{schema}.{table}.{column}"
    return f"{table}.{column}"
