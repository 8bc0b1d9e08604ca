"""
Notation generator module.

This package contains the generator that serializes a DatabaseSchema back
into notation text, and the round-trip validator built on top of it.
"""

from dbml_schema.generator.dbml_generator import (
    DBMLGenerator,
    format_column_name,
    format_default,
    generate,
)
from dbml_schema.generator.round_trip import RoundTripReport, validate_round_trip

__all__ = [
    "DBMLGenerator",
    "RoundTripReport",
    "format_column_name",
    "format_default",
    "generate",
    "validate_round_trip",
]
