"""
Notation parser module.

This package contains the preprocessing, line classification, settings
parsing and structural parsing stages that turn notation text into a
DatabaseSchema.
"""

from dbml_schema.parser.context import ParseContext
from dbml_schema.parser.dbml_parser import DBMLParser, parse
from dbml_schema.parser.line_classifier import LineClassifier
from dbml_schema.parser.preprocessor import SourceLine, preprocess
from dbml_schema.parser.settings_parser import Setting, parse_settings, split_settings

__all__ = [
    "DBMLParser",
    "LineClassifier",
    "ParseContext",
    "Setting",
    "SourceLine",
    "parse",
    "parse_settings",
    "preprocess",
    "split_settings",
]
