"""
Notation generator.

This module defines the DBMLGenerator class, which serializes a
DatabaseSchema back into notation text. Output is ordered exactly like the
input model (tables, then columns, then standalone references) and is meant
to parse back into an equivalent schema.
"""

from __future__ import annotations

import logging
import re
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union

from dbml_schema.exceptions import GenerationError
from dbml_schema.models.column import Column
from dbml_schema.models.config import GeneratorOptions
from dbml_schema.models.reference import Reference
from dbml_schema.models.result import GenerateMetadata, GenerateResult
from dbml_schema.models.schema import DatabaseSchema
from dbml_schema.models.table import Table
from dbml_schema.utils.identifiers import is_valid_identifier
from dbml_schema.utils.escaping import is_quoted, quote

logger = logging.getLogger(__name__)

_NUMERIC = re.compile(r"^[-+]?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?$")
_COLUMN_TYPE = re.compile(r"^[A-Za-z_][\w.]*(?:\([^)]*\))?(?:\[\])?$")
_BARE_VALUE = re.compile(r"^[\w.+-]+$")

_ColumnKey = Tuple[Optional[str], str, str]


def format_default(value: str) -> str:
    """Format a default value for the ``default:`` setting.

    Numeric literals are written bare, values that already carry quotes are
    written as they are, and everything else (``now()`` and
    ``CURRENT_TIMESTAMP`` included) is quoted and escaped.

    Args:
        value: Default value as stored on the column.

    Returns:
        Setting value text.

    Example:
        >>> format_default("now()")
        "'now()'"
        >>> format_default("0.00")
        '0.00'
    """
    if _NUMERIC.match(value) or is_quoted(value):
        return value
    return quote(value)


def format_column_name(column: Column) -> str:
    """Return the column name as it must be written.

    Bare identifiers are written as they are. Quoted names, and names that
    are not valid identifiers, are wrapped in double quotes, or in single
    quotes when the name itself contains a double quote.

    Raises:
        GenerationError: If the name contains both quote characters.
    """
    name = column.name
    if not column.quoted_name and is_valid_identifier(name):
        return name
    if '"' not in name:
        return f'"{name}"'
    if "'" not in name:
        return f"'{name}'"
    raise GenerationError(
        f"Column name cannot be quoted: {name}", column_name=name
    )


class DBMLGenerator:
    """Notation generator (main entry point for writing notation).

    Responsibilities:
    1. Render tables with their column settings and notes
    2. Render inline references as ``ref:`` settings and the rest as
       standalone ``Ref:`` lines after all tables
    3. Render the optional header and statistics footer

    The generator holds options only, so one instance can serialize any
    number of schemas.

    Usage:
        generator = DBMLGenerator(GeneratorOptions(indent_size=4))
        result = generator.generate(schema)
        print(result.text)
    """

    def __init__(self, options: Optional[GeneratorOptions] = None) -> None:
        """Initialize a DBMLGenerator.

        Args:
            options: GeneratorOptions, defaults to GeneratorOptions().
        """
        self.options = options or GeneratorOptions()

    def generate(self, schema: DatabaseSchema) -> GenerateResult:
        """Generate notation text for a schema.

        Never raises. A schema that cannot be expressed in the notation
        yields ``success=False`` with the reason in ``warnings``.

        Args:
            schema: DatabaseSchema to serialize.

        Returns:
            GenerateResult with text, warnings and metadata.
        """
        start = time.perf_counter()
        try:
            text, references_generated = self._render(schema)
        except GenerationError as e:
            logger.debug("Generation failed: %s", e.message)
            return self._failure(f"Generation failed: {e.message}", start)
        except Exception as e:
            logger.debug("Unexpected generation failure", exc_info=True)
            return self._failure(f"Unexpected generation error: {e}", start)

        generation_time = (time.perf_counter() - start) * 1000
        metadata = GenerateMetadata(
            tables_generated=len(schema.tables),
            references_generated=references_generated,
            lines_generated=len(text.split("\n")) if text else 0,
            generation_time=generation_time,
        )
        logger.debug(
            "Generated %d lines for %d tables in %.2f ms",
            metadata.lines_generated,
            metadata.tables_generated,
            generation_time,
        )
        return GenerateResult(text=text, success=True, metadata=metadata)

    # ========== Document ==========

    def _render(self, schema: DatabaseSchema) -> tuple[str, int]:
        options = self.options
        with_metadata = options.include_comments and options.include_metadata
        inline = self._inline_references(schema)

        parts: List[str] = []
        if with_metadata:
            parts.append(self._render_header(schema))

        for table in schema.tables:
            parts.append(self._render_table(table, inline))

        emitted_inline = {
            id(reference) for references in inline.values() for reference in references
        }
        standalone = [r for r in schema.references if id(r) not in emitted_inline]
        if standalone:
            lines = ["// References"] if options.include_comments else []
            lines.extend(self._render_reference(reference) for reference in standalone)
            parts.append("\n".join(lines))

        if with_metadata:
            parts.append(self._render_footer(schema))

        separator = "\n\n" if options.format_output else "\n"
        return separator.join(parts), len(schema.references)

    def _render_header(self, schema: DatabaseSchema) -> str:
        metadata = schema.metadata
        lines = [
            "// Database Schema",
            f"// Generated on: {datetime.now(timezone.utc).isoformat()}",
            f"// Version: {metadata.version}",
        ]
        if metadata.author:
            lines.append(f"// Author: {metadata.author}")
        if metadata.created:
            lines.append(f"// Created: {metadata.created}")
        if metadata.modified:
            lines.append(f"// Modified: {metadata.modified}")
        return "\n".join(lines)

    def _render_footer(self, schema: DatabaseSchema) -> str:
        return "\n".join(
            [
                "// Schema Statistics:",
                f"// Tables: {len(schema.tables)}",
                f"// Columns: {schema.column_count()}",
                f"// References: {len(schema.references)}",
            ]
        )

    # ========== Tables ==========

    def _render_table(
        self, table: Table, inline: Dict[_ColumnKey, List[Reference]]
    ) -> str:
        if not table.name or not is_valid_identifier(table.name):
            raise GenerationError(
                f"Invalid table name: {table.name}", table_name=table.name
            )
        if table.schema is not None and not is_valid_identifier(table.schema):
            raise GenerationError(
                f"Invalid schema name: {table.schema}", table_name=table.name
            )

        header = f"Table {table.qualified_name}"
        settings = self._custom_settings(table.custom_properties)
        if settings:
            header += f" [{', '.join(settings)}]"

        indent = self.options.indent
        lines = [f"{header} {{"]
        for column in table.columns:
            references = inline.get((table.schema, table.name, column.name), [])
            lines.append(indent + self._render_column(table, column, references))
        if table.note and self.options.include_comments:
            lines.append(f"{indent}Note: {quote(table.note)}")
        lines.append("}")
        return "\n".join(lines)

    def _render_column(
        self, table: Table, column: Column, references: List[Reference]
    ) -> str:
        if not column.type or not _COLUMN_TYPE.match(column.type):
            raise GenerationError(
                f"Column type cannot be expressed: {column.type!r}",
                table_name=table.name,
                column_name=column.name,
            )

        text = f"{format_column_name(column)} {column.type}"
        settings = self._column_settings(column, references)
        if settings:
            text += f" [{', '.join(settings)}]"
        return text

    def _column_settings(
        self, column: Column, references: List[Reference]
    ) -> List[str]:
        settings: List[str] = []
        if column.primary_key:
            settings.append("pk")
        if column.not_null:
            settings.append("not null")
        if column.unique:
            settings.append("unique")
        if column.default is not None:
            settings.append(f"default: {format_default(column.default)}")
        if column.note and self.options.include_comments:
            settings.append(f"note: {quote(column.note)}")
        for reference in references:
            settings.append(f"ref: {reference.type.symbol} {reference.to_endpoint()}")
        settings.extend(self._custom_settings(column.custom_properties))
        return settings

    def _custom_settings(self, properties: Dict[str, Union[str, bool]]) -> List[str]:
        if not self.options.preserve_custom_properties:
            return []
        settings: List[str] = []
        for key, value in properties.items():
            if value is True:
                settings.append(key)
            elif value is False:
                continue
            elif _BARE_VALUE.match(str(value)):
                settings.append(f"{key}: {value}")
            else:
                settings.append(f"{key}: {quote(str(value))}")
        return settings

    # ========== References ==========

    def _inline_references(
        self, schema: DatabaseSchema
    ) -> Dict[_ColumnKey, List[Reference]]:
        """Group inline references by the column that declares them.

        Only references whose declaring column exists and which carry
        nothing the ``ref:`` setting cannot express are written inline.
        All others fall back to standalone ``Ref:`` lines.
        """
        grouped: Dict[_ColumnKey, List[Reference]] = {}
        for reference in schema.references:
            if not reference.inline or reference.name:
                continue
            if reference.on_delete or reference.on_update:
                continue
            table = schema.get_table(reference.from_table, reference.from_schema)
            if table is None or table.schema != reference.from_schema:
                continue
            if not table.has_column(reference.from_column):
                continue
            key = (table.schema, table.name, reference.from_column)
            grouped.setdefault(key, []).append(reference)
        return grouped

    def _render_reference(self, reference: Reference) -> str:
        prefix = f"Ref {reference.name}:" if reference.name else "Ref:"
        text = (
            f"{prefix} {reference.from_endpoint()} "
            f"{reference.type.symbol} {reference.to_endpoint()}"
        )
        actions = []
        if reference.on_delete:
            actions.append(f"delete: {reference.on_delete}")
        if reference.on_update:
            actions.append(f"update: {reference.on_update}")
        if actions:
            text += f" [{', '.join(actions)}]"
        return text

    # ========== Helper methods ==========

    def _failure(self, message: str, start: float) -> GenerateResult:
        return GenerateResult(
            text="",
            success=False,
            warnings=[message],
            metadata=GenerateMetadata(
                generation_time=(time.perf_counter() - start) * 1000
            ),
        )


def generate(
    schema: DatabaseSchema,
    options: Union[GeneratorOptions, Dict[str, Any], None] = None,
) -> GenerateResult:
    """Generate notation text with a fresh generator.

    Args:
        schema: DatabaseSchema to serialize.
        options: GeneratorOptions, or a mapping accepted by
            ``GeneratorOptions.from_dict``.

    Returns:
        GenerateResult. Invalid options are reported like any other
        generation failure.
    """
    if not isinstance(options, GeneratorOptions):
        try:
            options = GeneratorOptions.from_dict(options)
        except (AttributeError, TypeError, ValueError) as e:
            return GenerateResult(
                text="", success=False, warnings=[f"Invalid generator options: {e}"]
            )
    return DBMLGenerator(options).generate(schema)
