"""
Structural parser for the schema notation.

This module defines the DBMLParser class, which turns notation text into a
DatabaseSchema. Parsing is line oriented and forgiving: every problem is
recorded as a line-scoped diagnostic, the offending construct is dropped and
parsing resumes at the next line. The only way a parse ends early is an
unexpected internal failure, which is reported as a single error.
"""

from __future__ import annotations

import logging
import re
import time
from typing import Callable, Dict, Optional

from dbml_schema.models.column import Column
from dbml_schema.models.config import ErrorMode, ParserConfig
from dbml_schema.models.diagnostic import DiagnosticKind
from dbml_schema.models.line_kind import LineKind
from dbml_schema.models.reference import (
    REFERENTIAL_ACTIONS,
    Reference,
    RelationshipType,
)
from dbml_schema.models.result import ParseMetadata, ParseResult
from dbml_schema.models.schema import DatabaseSchema
from dbml_schema.models.table import Table
from dbml_schema.parser.context import ParseContext
from dbml_schema.parser.line_classifier import LineClassifier
from dbml_schema.parser.preprocessor import SourceLine, preprocess
from dbml_schema.parser.settings_parser import Setting, parse_settings
from dbml_schema.utils.escaping import QUOTE_CHARS, strip_quotes
from dbml_schema.utils.identifiers import is_valid_identifier

logger = logging.getLogger(__name__)

_TABLE_HEADER = re.compile(
    r"^(?:Table|table)\s+(?P<name>[^\s\[{]+)"
    r"\s*(?:\[(?P<settings>.*)\])?"
    r"\s*(?P<brace>\{)?\s*$"
)

_COLUMN = re.compile(
    r"""^(?:"(?P<dq_name>[^"]+)"|'(?P<sq_name>[^']+)'"""
    r"""|(?P<name>[^\s\[\]{}"'][^\s\[\]"']*))"""
    r"""\s+(?P<type>[A-Za-z_][\w.]*(?:\([^)]*\))?(?:\[\])?)"""
    r"""\s*(?:\[(?P<settings>.*)\])?(?P<rest>.*)$"""
)

_ENDPOINT = r"(?:\w+\.)?\w+\.\w+"
_SYMBOL = r"<>|[<>-]"

_REFERENCE = re.compile(
    rf"^(?:Ref|ref)(?:\s+(?P<name>\w+))?\s*:"
    rf"\s*(?P<source>{_ENDPOINT})\s*(?P<symbol>{_SYMBOL})\s*(?P<target>{_ENDPOINT})"
    rf"\s*(?:\[(?P<settings>.*)\])?\s*$"
)

_INLINE_REFERENCE = re.compile(
    rf"^(?P<symbol>{_SYMBOL})\s*(?P<target>{_ENDPOINT})$"
)

_NOTE_LINE = re.compile(r"^(?:Note|note)\s*:\s*(?P<value>.*)$")

_UNMODELED_MESSAGES = {
    LineKind.ENUM: "Enum definitions are not fully supported",
    LineKind.PROJECT: "Project definitions are not modeled",
    LineKind.TABLE_GROUP: "Table groups are not supported",
    LineKind.INDEXES: "Index definitions are not modeled",
}


def _split_endpoint(endpoint: str) -> tuple[Optional[str], str, str]:
    parts = endpoint.split(".")
    if len(parts) == 3:
        return parts[0], parts[1], parts[2]
    return None, parts[0], parts[1]


def _brace_delta(text: str) -> int:
    """Count ``{`` minus ``}`` outside quoted spans."""
    delta = 0
    quote_char = ""
    escaped = False
    for char in text:
        if quote_char:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote_char:
                quote_char = ""
        elif char in QUOTE_CHARS:
            quote_char = char
        elif char == "{":
            delta += 1
        elif char == "}":
            delta -= 1
    return delta


class DBMLParser:
    """Structural parser (main entry point for reading notation).

    Responsibilities:
    1. Classify each preprocessed line and dispatch it to a construct parser
    2. Build tables, columns and references
    3. Validate identifiers, duplicates and reference endpoints
    4. Record diagnostics instead of raising

    The parser object holds configuration only. All parse state lives in a
    ParseContext created by ``parse``, so one parser can be reused for any
    number of independent calls.

    Usage:
        parser = DBMLParser()
        result = parser.parse(text)

        for error in result.errors:
            print(error.format())
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize a DBMLParser.

        Args:
            config: ParserConfig, defaults to ParserConfig().
        """
        self.config = config or ParserConfig()
        self.classifier = LineClassifier()
        self._handlers: Dict[LineKind, Callable[[ParseContext, SourceLine], None]] = {
            LineKind.TABLE: self._parse_table,
            LineKind.REF: self._parse_reference,
            LineKind.ENUM: self._skip_unmodeled,
            LineKind.PROJECT: self._skip_unmodeled,
            LineKind.TABLE_GROUP: self._skip_unmodeled,
            LineKind.INDEXES: self._skip_unmodeled,
        }

    def parse(self, text: str) -> ParseResult:
        """Parse notation text.

        Never raises. An unexpected failure while dispatching a line is
        reported as one ``Fatal parsing error`` diagnostic at that line and
        everything parsed before it is returned.

        Args:
            text: Notation text.

        Returns:
            ParseResult with schema, diagnostics and metadata.
        """
        start = time.perf_counter()
        context = ParseContext(lines=preprocess(text), config=self.config)

        try:
            self._parse_lines(context)
            self._check_inline_references(context)
        except Exception as e:
            logger.debug("Parsing stopped at line index %d", context.cursor, exc_info=True)
            context.error(DiagnosticKind.INTERNAL, f"Fatal parsing error: {e}")

        schema = DatabaseSchema(
            tables=context.registry.get_all_tables(),
            references=list(context.references),
        )
        parse_time = (time.perf_counter() - start) * 1000

        logger.debug(
            "Parsed %d tables and %d references from %d lines in %.2f ms",
            len(schema.tables),
            len(schema.references),
            len(context.lines),
            parse_time,
        )

        return ParseResult(
            schema=schema,
            errors=context.collector.errors,
            warnings=context.collector.warnings,
            metadata=ParseMetadata(
                parse_time=parse_time,
                lines_processed=len(context.lines),
                features_used=self._features_used(schema, context),
            ),
        )

    # ========== Dispatch ==========

    def _parse_lines(self, context: ParseContext) -> None:
        while context.cursor < len(context.lines):
            line = context.lines[context.cursor]
            kind = self.classifier.classify(line.text)
            handler = self._handlers.get(kind)
            if handler is None:
                context.warning(
                    DiagnosticKind.UNRECOGNIZED, f"Unrecognized syntax: {line.text}", line
                )
            else:
                handler(context, line)
            context.cursor += 1

    # ========== Tables ==========

    def _parse_table(self, context: ParseContext, line: SourceLine) -> None:
        match = _TABLE_HEADER.match(line.text)
        if not match:
            context.error(
                DiagnosticKind.STRUCTURAL,
                f"Invalid table definition syntax: {line.text}",
                line,
            )
            self._skip_block(context, line)
            return

        full_name = match.group("name")
        schema_name, _, table_name = full_name.rpartition(".")
        schema_name = schema_name or None

        valid = True
        if schema_name is not None and not is_valid_identifier(schema_name):
            context.error(
                DiagnosticKind.SEMANTIC,
                f"Invalid schema name: {schema_name}",
                line,
                match.start("name"),
            )
            valid = False
        if not is_valid_identifier(table_name):
            context.error(
                DiagnosticKind.SEMANTIC,
                f"Invalid table name: {table_name}",
                line,
                match.start("name") + (len(schema_name) + 1 if schema_name else 0),
            )
            valid = False
        if valid and context.registry.has_table(table_name, schema_name):
            context.error(
                DiagnosticKind.SEMANTIC,
                f"Duplicate table name: {full_name}",
                line,
                match.start("name"),
            )
            valid = False

        if not valid:
            self._skip_block(context, line)
            return

        table = Table(id=context.next_table_id(), name=table_name, schema=schema_name)
        if match.group("settings") is not None:
            self._apply_table_settings(context, line, table, match.group("settings"))
        context.registry.register_table(table)

        if match.group("brace"):
            self._parse_table_body(context, table, line)
        elif context.has_next() and context.lines[context.cursor + 1].text == "{":
            context.advance()
            self._parse_table_body(context, table, line)

    def _apply_table_settings(
        self, context: ParseContext, line: SourceLine, table: Table, content: str
    ) -> None:
        for setting in parse_settings(content):
            if setting.name == "note":
                table.note = setting.value
            else:
                self._keep_custom_property(
                    context, line, table.custom_properties, setting, "table"
                )

    def _parse_table_body(
        self, context: ParseContext, table: Table, header: SourceLine
    ) -> None:
        while context.has_next():
            line = context.advance()
            kind = self.classifier.classify(line.text, in_table_body=True)

            if kind == LineKind.BRACE and line.text == "}":
                return
            if self.classifier.opens_block(line.text):
                # Hand the header back to the top-level loop.
                context.step_back()
                break
            if kind == LineKind.COLUMN_LIKE:
                column = self._parse_column(context, line, table)
                if column is not None:
                    table.add_column(column)
            elif kind == LineKind.NOTE:
                self._parse_note(context, line, table)
            elif kind == LineKind.INDEXES:
                self._skip_unmodeled(context, line)
            else:
                context.warning(
                    DiagnosticKind.UNRECOGNIZED,
                    f"Unrecognized table content: {line.text}",
                    line,
                )

        context.error(
            DiagnosticKind.STRUCTURAL,
            f"Missing closing brace for table: {table.qualified_name}",
            header,
        )

    def _parse_note(self, context: ParseContext, line: SourceLine, table: Table) -> None:
        match = _NOTE_LINE.match(line.text)
        value = match.group("value").strip() if match else ""
        if not value:
            context.error(DiagnosticKind.STRUCTURAL, f"Invalid note syntax: {line.text}", line)
            return
        table.note = strip_quotes(value)

    # ========== Columns ==========

    def _parse_column(
        self, context: ParseContext, line: SourceLine, table: Table
    ) -> Optional[Column]:
        match = _COLUMN.match(line.text)
        rest = match.group("rest").strip() if match else ""
        if not match or rest.startswith("["):
            context.error(
                DiagnosticKind.STRUCTURAL,
                f"Invalid column definition: {line.text}",
                line,
            )
            return None

        quoted_name = match.group("dq_name") or match.group("sq_name")
        name = quoted_name or match.group("name")
        if quoted_name is None and not is_valid_identifier(name):
            context.error(DiagnosticKind.SEMANTIC, f"Invalid column name: {name}", line)
            return None

        column = Column(
            id=context.next_column_id(),
            name=name,
            type=match.group("type"),
            quoted_name=quoted_name is not None,
        )

        if match.group("settings") is not None:
            self._apply_column_settings(
                context, line, table, column, match.group("settings")
            )

        if rest:
            context.warning(
                DiagnosticKind.STRUCTURAL,
                f"Unexpected content after column definition ignored: {rest}",
                line,
                match.start("rest"),
            )

        return column

    def _apply_column_settings(
        self,
        context: ParseContext,
        line: SourceLine,
        table: Table,
        column: Column,
        content: str,
    ) -> None:
        for setting in parse_settings(content):
            name = setting.name
            if name in ("pk", "primary key"):
                column.primary_key = True
            elif name == "not null":
                column.not_null = True
            elif name == "unique":
                column.unique = True
            elif name == "default":
                if setting.is_flag:
                    context.warning(
                        DiagnosticKind.STRUCTURAL, "Missing value for setting: default", line
                    )
                else:
                    column.default = setting.value
            elif name == "note":
                column.note = setting.value
            elif name == "ref":
                self._parse_inline_reference(context, line, table, column, setting)
            else:
                self._keep_custom_property(
                    context, line, column.custom_properties, setting, "column"
                )

    def _keep_custom_property(
        self,
        context: ParseContext,
        line: SourceLine,
        properties: dict,
        setting: Setting,
        owner: str,
    ) -> None:
        properties[setting.key] = setting.value if setting.value is not None else True
        if context.config.report_unknown_settings:
            context.warning(
                DiagnosticKind.UNKNOWN_SETTING,
                f"Unknown {owner} setting: {setting.key}",
                line,
            )

    # ========== References ==========

    def _parse_inline_reference(
        self,
        context: ParseContext,
        line: SourceLine,
        table: Table,
        column: Column,
        setting: Setting,
    ) -> None:
        match = _INLINE_REFERENCE.match(setting.value or "")
        if not match:
            context.error(
                DiagnosticKind.STRUCTURAL,
                f"Invalid inline reference: {setting.value or ''}",
                line,
            )
            return

        to_schema, to_table, to_column = _split_endpoint(match.group("target"))
        reference = Reference(
            id=context.next_reference_id(),
            from_table=table.name,
            from_column=column.name,
            to_table=to_table,
            to_column=to_column,
            type=RelationshipType.from_symbol(match.group("symbol")),
            from_schema=table.schema,
            to_schema=to_schema,
            inline=True,
        )
        context.references.append(reference)
        context.inline_references.append((reference, column, line))
        column.foreign_key = True

    def _parse_reference(self, context: ParseContext, line: SourceLine) -> None:
        match = _REFERENCE.match(line.text)
        if not match:
            context.error(
                DiagnosticKind.STRUCTURAL, f"Invalid reference syntax: {line.text}", line
            )
            return

        from_schema, from_table, from_column = _split_endpoint(match.group("source"))
        to_schema, to_table, to_column = _split_endpoint(match.group("target"))

        source_table = context.registry.find_table(from_table, from_schema)
        if source_table is None:
            self._unresolved_table(context, line, from_schema, from_table, match.start("source"))
            return
        target_table = context.registry.find_table(to_table, to_schema)
        if target_table is None:
            self._unresolved_table(context, line, to_schema, to_table, match.start("target"))
            return

        source_column = source_table.get_column(from_column)
        if source_column is None:
            context.error(
                DiagnosticKind.SEMANTIC,
                f"Referenced column not found: {from_table}.{from_column}",
                line,
                match.start("source"),
            )
            return
        if not target_table.has_column(to_column):
            context.error(
                DiagnosticKind.SEMANTIC,
                f"Referenced column not found: {to_table}.{to_column}",
                line,
                match.start("target"),
            )
            return

        reference = Reference(
            id=context.next_reference_id(),
            name=match.group("name"),
            from_table=from_table,
            from_column=from_column,
            to_table=to_table,
            to_column=to_column,
            type=RelationshipType.from_symbol(match.group("symbol")),
            from_schema=from_schema,
            to_schema=to_schema,
        )
        if match.group("settings") is not None:
            self._apply_reference_settings(context, line, reference, match.group("settings"))

        context.references.append(reference)
        source_column.foreign_key = True

    def _unresolved_table(
        self,
        context: ParseContext,
        line: SourceLine,
        schema: Optional[str],
        name: str,
        offset: int,
    ) -> None:
        qualified = f"{schema}.{name}" if schema else name
        context.error(
            DiagnosticKind.SEMANTIC, f"Referenced table not found: {qualified}", line, offset
        )

    def _apply_reference_settings(
        self, context: ParseContext, line: SourceLine, reference: Reference, content: str
    ) -> None:
        for setting in parse_settings(content):
            if setting.name in ("delete", "on delete"):
                reference.on_delete = self._referential_action(context, line, setting)
            elif setting.name in ("update", "on update"):
                reference.on_update = self._referential_action(context, line, setting)
            elif context.config.report_unknown_settings:
                context.warning(
                    DiagnosticKind.UNKNOWN_SETTING,
                    f"Unknown reference setting: {setting.key}",
                    line,
                )

    def _referential_action(
        self, context: ParseContext, line: SourceLine, setting: Setting
    ) -> Optional[str]:
        if setting.value is None:
            context.warning(
                DiagnosticKind.STRUCTURAL, f"Missing value for setting: {setting.key}", line
            )
            return None
        if setting.value.lower() not in REFERENTIAL_ACTIONS:
            context.warning(
                DiagnosticKind.UNKNOWN_SETTING,
                f"Unknown referential action: {setting.value}",
                line,
            )
        return setting.value

    def _check_inline_references(self, context: ParseContext) -> None:
        """Check inline reference targets once every table is known.

        Inline targets are not resolved while parsing, since a column may
        point at a table declared further down. Controlled by
        ``ParserConfig.inline_reference_check``.
        """
        mode = context.config.inline_reference_check
        if mode == ErrorMode.IGNORE:
            return

        for reference, column, line in context.inline_references:
            target = context.registry.find_table(reference.to_table, reference.to_schema)
            if target is None:
                message = f"Referenced table not found: {reference.to_table}"
            elif not target.has_column(reference.to_column):
                message = (
                    f"Referenced column not found: "
                    f"{reference.to_table}.{reference.to_column}"
                )
            else:
                continue

            if mode == ErrorMode.WARN:
                context.warning(DiagnosticKind.SEMANTIC, message, line)
                continue

            context.error(DiagnosticKind.SEMANTIC, message, line)
            context.references.remove(reference)
            column.foreign_key = any(
                ref.from_table == reference.from_table
                and ref.from_schema == reference.from_schema
                and ref.from_column == column.name
                for ref in context.references
            )

    # ========== Unmodeled blocks ==========

    def _skip_unmodeled(self, context: ParseContext, line: SourceLine) -> None:
        kind = self.classifier.classify(line.text)
        context.add_feature(kind.feature_tag)
        context.warning(
            DiagnosticKind.UNSUPPORTED_CONSTRUCT,
            f"{_UNMODELED_MESSAGES[kind]}: {line.text}",
            line,
        )
        self._skip_block(context, line)

    def _skip_block(self, context: ParseContext, header: SourceLine) -> None:
        """Consume the lines of a block opened on ``header``.

        The whole block, nested braces included, is skipped without
        diagnostics for its content.
        """
        depth = _brace_delta(header.text)
        if depth <= 0 and context.has_next() and context.lines[context.cursor + 1].text == "{":
            context.advance()
            depth = 1
        while depth > 0 and context.has_next():
            depth += _brace_delta(context.advance().text)
        if depth > 0:
            context.error(
                DiagnosticKind.STRUCTURAL,
                f"Missing closing brace for block: {header.text}",
                header,
            )

    # ========== Metadata ==========

    def _features_used(self, schema: DatabaseSchema, context: ParseContext) -> list[str]:
        features = ["tables", "columns"]
        columns = [column for table in schema.tables for column in table.columns]

        if schema.references:
            features.append("references")
        if any(table.note for table in schema.tables):
            features.append("table_notes")
        if any(column.note for column in columns):
            features.append("column_notes")
        if any(column.primary_key for column in columns):
            features.append("primary_keys")
        if any(column.foreign_key for column in columns):
            features.append("foreign_keys")
        if any(table.schema for table in schema.tables):
            features.append("schemas")
        if any(table.custom_properties for table in schema.tables) or any(
            column.custom_properties for column in columns
        ):
            features.append("custom_properties")

        features.extend(context.features)
        return features


def parse(text: str, config: Optional[ParserConfig] = None) -> ParseResult:
    """Parse notation text with a fresh parser.

    Args:
        text: Notation text.
        config: Optional ParserConfig.

    Returns:
        ParseResult.
    """
    return DBMLParser(config).parse(text)
