"""
Round-trip validation.

Generates notation for a schema, parses it back and compares the two
schemas coarsely: table count, table names and reference count. Column
level equality is not checked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from dbml_schema.generator.dbml_generator import generate
from dbml_schema.models.config import GeneratorOptions
from dbml_schema.models.schema import DatabaseSchema
from dbml_schema.parser.dbml_parser import parse

logger = logging.getLogger(__name__)


@dataclass
class RoundTripReport:
    """Outcome of a round-trip check.

    Attributes:
        is_valid: True if the regenerated text parsed without errors into a
            schema with the same tables and reference count.
        errors: Human-readable reasons the check failed.
        generated_text: Text produced by the generator (empty when
            generation failed).
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    generated_text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "generated_text": self.generated_text,
        }


def validate_round_trip(
    schema: DatabaseSchema,
    options: Union[GeneratorOptions, Dict[str, Any], None] = None,
) -> RoundTripReport:
    """Check that a schema survives generation followed by parsing.

    Args:
        schema: Schema to check.
        options: Generator options used for the generation step.

    Returns:
        RoundTripReport.

    Example:
        >>> from dbml_schema import parse, validate_round_trip
        >>> schema = parse("Table users {\\n  id integer [pk]\\n}").schema
        >>> validate_round_trip(schema).is_valid
        True
    """
    generated = generate(schema, options)
    if not generated.success:
        return RoundTripReport(is_valid=False, errors=list(generated.warnings))

    reparsed = parse(generated.text)
    errors = [
        f"Parse error at line {d.line}: {d.message}" for d in reparsed.errors
    ]

    original_count = len(schema.tables)
    reparsed_count = len(reparsed.schema.tables)
    if original_count != reparsed_count:
        errors.append(
            f"Table count mismatch: expected {original_count}, got {reparsed_count}"
        )

    original_names = {table.qualified_name for table in schema.tables}
    reparsed_names = {table.qualified_name for table in reparsed.schema.tables}
    missing = sorted(original_names - reparsed_names)
    unexpected = sorted(reparsed_names - original_names)
    if missing:
        errors.append(f"Missing tables after round trip: {', '.join(missing)}")
    if unexpected:
        errors.append(f"Unexpected tables after round trip: {', '.join(unexpected)}")

    original_refs = len(schema.references)
    reparsed_refs = len(reparsed.schema.references)
    if original_refs != reparsed_refs:
        errors.append(
            f"Reference count mismatch: expected {original_refs}, got {reparsed_refs}"
        )

    logger.debug("Round trip finished with %d problem(s)", len(errors))
    return RoundTripReport(
        is_valid=not errors, errors=errors, generated_text=generated.text
    )
