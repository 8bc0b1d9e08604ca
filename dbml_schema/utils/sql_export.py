"""
SQL DDL export.

This module renders a DatabaseSchema as CREATE TABLE statements followed by
ALTER TABLE foreign key constraints, and normalizes every statement for a
target dialect with sqlglot. Type names are passed through unvalidated.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

import sqlglot
from sqlglot.dialects.dialect import Dialect

from dbml_schema.models.column import Column
from dbml_schema.models.reference import Reference, RelationshipType
from dbml_schema.models.schema import DatabaseSchema
from dbml_schema.models.table import Table
from dbml_schema.utils.identifiers import is_valid_identifier

logger = logging.getLogger(__name__)

# Statements are rendered in this dialect before being transpiled.
SOURCE_DIALECT = "postgres"

_NUMERIC = re.compile(r"^[-+]?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?$")
_FUNCTION_CALL = re.compile(r"^\w+\(\)$")
_KEYWORD_DEFAULTS = {
    "current_timestamp",
    "current_date",
    "current_time",
    "true",
    "false",
    "null",
}


@dataclass
class SqlExport:
    """Result of a DDL export.

    Attributes:
        statements: Statements without trailing semicolons, in order.
        warnings: Messages about constructs that were skipped or could not
            be normalized.
        dialect: Target dialect name.
    """

    statements: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    dialect: str = SOURCE_DIALECT

    @property
    def sql(self) -> str:
        """Return all statements as one script."""
        return "".join(f"{statement};\n\n" for statement in self.statements).rstrip("\n")


def quote_identifier(name: str) -> str:
    """Quote an identifier unless it is a plain identifier."""
    if is_valid_identifier(name):
        return name
    return '"' + name.replace('"', '""') + '"'


def sql_default(value: str) -> str:
    """Render a default value as a SQL literal or expression.

    Example:
        >>> sql_default("now()")
        'now()'
        >>> sql_default("active")
        "'active'"
    """
    if _NUMERIC.match(value) or _FUNCTION_CALL.match(value):
        return value
    if value.lower() in _KEYWORD_DEFAULTS:
        return value.upper()
    return "'" + value.replace("'", "''") + "'"


def _table_name(table: Table) -> str:
    name = quote_identifier(table.name)
    if table.schema:
        return f"{quote_identifier(table.schema)}.{name}"
    return name


def _column_definition(column: Column, inline_primary_key: bool) -> str:
    parts = [quote_identifier(column.name), column.type]
    if inline_primary_key:
        parts.append("PRIMARY KEY")
    if column.not_null:
        parts.append("NOT NULL")
    if column.unique:
        parts.append("UNIQUE")
    if column.default is not None:
        parts.append(f"DEFAULT {sql_default(column.default)}")
    return " ".join(parts)


def create_table_sql(table: Table) -> str:
    """Render one CREATE TABLE statement in the source dialect.

    A single primary key column is declared inline. Several primary key
    columns become one composite PRIMARY KEY constraint.
    """
    primary_keys = [column for column in table.columns if column.primary_key]
    composite = len(primary_keys) > 1

    lines = [
        f"  {_column_definition(column, column.primary_key and not composite)}"
        for column in table.columns
    ]
    if composite:
        columns = ", ".join(quote_identifier(c.name) for c in primary_keys)
        lines.append(f"  PRIMARY KEY ({columns})")

    body = ",\n".join(lines)
    return f"CREATE TABLE {_table_name(table)} (\n{body}\n)"


def foreign_key_sql(reference: Reference, schema: DatabaseSchema) -> Optional[str]:
    """Render the ALTER TABLE statement for a reference.

    ``<`` references put the foreign key on the "to" side. Unnamed
    references get a ``fk_<table>_<column>`` constraint name. Many-to-many
    references, and references to tables missing from the schema, have no
    foreign key form and return None.
    """
    if reference.type == RelationshipType.MANY_TO_MANY:
        return None

    owner_table, owner_column = reference.from_table, reference.from_column
    owner_schema = reference.from_schema
    target_table, target_column = reference.to_table, reference.to_column
    target_schema = reference.to_schema
    if reference.type == RelationshipType.MANY_TO_ONE:
        owner_table, target_table = target_table, owner_table
        owner_column, target_column = target_column, owner_column
        owner_schema, target_schema = target_schema, owner_schema

    owner = schema.get_table(owner_table, owner_schema)
    target = schema.get_table(target_table, target_schema)
    if owner is None or target is None:
        return None

    constraint = reference.name or f"fk_{owner.name}_{owner_column}"
    statement = (
        f"ALTER TABLE {_table_name(owner)} "
        f"ADD CONSTRAINT {quote_identifier(constraint)} "
        f"FOREIGN KEY ({quote_identifier(owner_column)}) "
        f"REFERENCES {_table_name(target)} ({quote_identifier(target_column)})"
    )
    if reference.on_delete:
        statement += f" ON DELETE {reference.on_delete.upper()}"
    if reference.on_update:
        statement += f" ON UPDATE {reference.on_update.upper()}"
    return statement


def transpile(statement: str, dialect: str) -> str:
    """Normalize a statement for a dialect.

    Raises:
        sqlglot.errors.ParseError: If sqlglot cannot parse the statement.
    """
    return ";\n".join(
        sqlglot.transpile(statement, read=SOURCE_DIALECT, write=dialect, pretty=True)
    )


def export_sql(schema: DatabaseSchema, dialect: str = SOURCE_DIALECT) -> SqlExport:
    """Export a schema as DDL for a dialect.

    Statements sqlglot cannot parse (typically because of an unusual type
    name) are kept as rendered and reported in ``warnings``.

    Args:
        schema: DatabaseSchema to export.
        dialect: Target sqlglot dialect name (e.g. "postgres", "mysql").

    Returns:
        SqlExport.

    Raises:
        ValueError: If the dialect is unknown to sqlglot.

    Example:
        >>> export = export_sql(parse(text).schema, dialect="mysql")
        >>> print(export.sql)
    """
    Dialect.get_or_raise(dialect)
    export = SqlExport(dialect=dialect)

    rendered: list[tuple[str, str]] = [
        (table.qualified_name, create_table_sql(table)) for table in schema.tables
    ]
    for reference in schema.references:
        statement = foreign_key_sql(reference, schema)
        if statement is None:
            export.warnings.append(
                f"Reference has no foreign key form: "
                f"{reference.from_endpoint()} {reference.type.symbol} "
                f"{reference.to_endpoint()}"
            )
            continue
        rendered.append((reference.from_endpoint(), statement))

    for subject, statement in rendered:
        try:
            export.statements.append(transpile(statement, dialect))
        except (sqlglot.errors.ParseError, sqlglot.errors.TokenError) as e:
            logger.debug("Keeping statement for %s verbatim: %s", subject, e)
            export.warnings.append(f"Could not normalize SQL for {subject}: {e}")
            export.statements.append(statement)

    logger.debug(
        "Exported %d statements for dialect %s", len(export.statements), dialect
    )
    return export
