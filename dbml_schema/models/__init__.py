"""
Data models for the schema notation.

This package contains the schema model produced by the parser and consumed
by the generator (tables, columns, references), diagnostics, configuration
and result records.
"""

from dbml_schema.models.column import Column
from dbml_schema.models.config import ErrorMode, GeneratorOptions, ParserConfig
from dbml_schema.models.diagnostic import Diagnostic, DiagnosticKind, Severity
from dbml_schema.models.line_kind import LineKind
from dbml_schema.models.reference import Reference, RelationshipType
from dbml_schema.models.result import (
    GenerateMetadata,
    GenerateResult,
    ParseMetadata,
    ParseResult,
)
from dbml_schema.models.schema import DatabaseSchema, SchemaMetadata
from dbml_schema.models.table import Table

__all__ = [
    "Column",
    "DatabaseSchema",
    "Diagnostic",
    "DiagnosticKind",
    "ErrorMode",
    "GenerateMetadata",
    "GenerateResult",
    "GeneratorOptions",
    "LineKind",
    "ParseMetadata",
    "ParseResult",
    "ParserConfig",
    "Reference",
    "RelationshipType",
    "SchemaMetadata",
    "Severity",
    "Table",
]
