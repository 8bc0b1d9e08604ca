"""
Table registry for tables declared during a parse.

This module defines the TableRegistry class, which keeps the tables of one
parse in declaration order, keyed by their (schema, name) pair, and resolves
table and column names written in references.
"""

from typing import Dict, List, Optional, Tuple

from dbml_schema.exceptions import SchemaNotationError
from dbml_schema.models.column import Column
from dbml_schema.models.table import Table

TableKey = Tuple[Optional[str], str]


class TableRegistry:
    """Table registry: tables declared so far in one parse.

    Responsibilities:
    1. Register tables, refusing a second table with the same (schema, name)
    2. Resolve table names written with or without a schema qualifier
    3. Resolve columns of registered tables

    Names are case-sensitive.

    Usage:
        registry = TableRegistry()
        registry.register_table(Table(id="table_0", name="users"))

        if registry.has_table("users"):
            table = registry.find_table("users")
    """

    def __init__(self) -> None:
        """Initialize a TableRegistry."""
        self.tables: Dict[TableKey, Table] = {}

    def register_table(self, table: Table) -> None:
        """Register a table definition.

        Args:
            table: Table to register.

        Raises:
            SchemaNotationError: If a table with the same (schema, name)
                pair is already registered. The registered table is kept.
        """
        if table.key in self.tables:
            raise SchemaNotationError(
                f"Table '{table.qualified_name}' is already registered"
            )
        self.tables[table.key] = table

    def has_table(self, name: str, schema: Optional[str] = None) -> bool:
        """Check if a table with exactly this (schema, name) pair exists.

        Args:
            name: Table name.
            schema: Schema qualifier, None for unqualified tables.

        Returns:
            True if the pair is registered, False otherwise.
        """
        return (schema, name) in self.tables

    def find_table(self, name: str, schema: Optional[str] = None) -> Optional[Table]:
        """Resolve a table name as written in a reference.

        A qualified name must match exactly. An unqualified name prefers an
        unqualified table and otherwise falls back to the first table with
        that name in any schema.

        Args:
            name: Table name.
            schema: Schema qualifier, if one was written.

        Returns:
            Table or None if not found.
        """
        if schema is not None:
            return self.tables.get((schema, name))

        table = self.tables.get((None, name))
        if table is not None:
            return table

        for table in self.tables.values():
            if table.name == name:
                return table
        return None

    def find_column(
        self, table_name: str, column_name: str, schema: Optional[str] = None
    ) -> Optional[Column]:
        """Resolve ``[schema.]table.column``.

        Args:
            table_name: Table name.
            column_name: Column name.
            schema: Optional schema qualifier.

        Returns:
            Column or None if the table or column is missing.
        """
        table = self.find_table(table_name, schema)
        if table is None:
            return None
        return table.get_column(column_name)

    def get_all_tables(self) -> List[Table]:
        """Get all tables in declaration order.

        Returns:
            List of all Table objects.
        """
        return list(self.tables.values())

    def __len__(self) -> int:
        return len(self.tables)
