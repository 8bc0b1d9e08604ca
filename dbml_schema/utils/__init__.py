"""
Utility functions and helpers for the schema notation toolkit.

This package contains string escaping, identifier rules, diagnostic
collection and the SQL DDL export.
"""

from dbml_schema.utils.diagnostics import DiagnosticCollector, get_suggestion
from dbml_schema.utils.escaping import (
    escape_string,
    is_quoted,
    quote,
    strip_quotes,
    unescape_string,
)
from dbml_schema.utils.identifiers import is_valid_identifier
from dbml_schema.utils.sql_export import SqlExport, export_sql

__all__ = [
    "DiagnosticCollector",
    "get_suggestion",
    "escape_string",
    "is_quoted",
    "quote",
    "strip_quotes",
    "unescape_string",
    "is_valid_identifier",
    "SqlExport",
    "export_sql",
]
