"""
dbml-schema v1.0

Bidirectional translator between a line-and-brace schema notation (tables,
typed columns with inline settings, references) and an in-memory schema
model. Parsing is forgiving and reports line-scoped diagnostics; generated
text parses back into an equivalent schema.

Example:
    >>> from dbml_schema import parse, generate
    >>> result = parse("Table users {\\n  id integer [pk]\\n}")
    >>> result.schema.table_names()
    ['users']
    >>> text = generate(result.schema).text
"""

from dbml_schema.version import __version__, __version_info__

__author__ = "dbml-schema Contributors"

from dbml_schema.exceptions import (
    GenerationError,
    SchemaFileError,
    SchemaNotationError,
)
from dbml_schema.generator.dbml_generator import DBMLGenerator, generate
from dbml_schema.generator.round_trip import RoundTripReport, validate_round_trip
from dbml_schema.graph.reference_graph import ReferenceGraph
from dbml_schema.models.column import Column
from dbml_schema.models.config import ErrorMode, GeneratorOptions, ParserConfig
from dbml_schema.models.diagnostic import Diagnostic, DiagnosticKind, Severity
from dbml_schema.models.reference import Reference, RelationshipType
from dbml_schema.models.result import (
    GenerateMetadata,
    GenerateResult,
    ParseMetadata,
    ParseResult,
)
from dbml_schema.models.schema import DatabaseSchema, SchemaMetadata
from dbml_schema.models.table import Table
from dbml_schema.parser.dbml_parser import DBMLParser, parse
from dbml_schema.registry.table_registry import TableRegistry
from dbml_schema.utils.sql_export import SqlExport, export_sql

__all__ = [
    # Version info
    "__version__",
    "__version_info__",
    # Entry points
    "parse",
    "generate",
    "validate_round_trip",
    "export_sql",
    # Parser and generator
    "DBMLParser",
    "DBMLGenerator",
    # Configuration
    "ParserConfig",
    "GeneratorOptions",
    "ErrorMode",
    # Results
    "ParseResult",
    "ParseMetadata",
    "GenerateResult",
    "GenerateMetadata",
    "RoundTripReport",
    "SqlExport",
    # Data models
    "DatabaseSchema",
    "SchemaMetadata",
    "Table",
    "Column",
    "Reference",
    "RelationshipType",
    "Diagnostic",
    "DiagnosticKind",
    "Severity",
    # Registry and analysis
    "TableRegistry",
    "ReferenceGraph",
    # Exceptions
    "SchemaNotationError",
    "GenerationError",
    "SchemaFileError",
]
