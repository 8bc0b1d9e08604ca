"""
Line kind enumeration.

This module defines the LineKind enum, the result of classifying one
preprocessed line of notation text before it is dispatched to a construct
parser.
"""

from enum import Enum


class LineKind(Enum):
    """Line kind enumeration.

    Classification rules:
    - TABLE: ``Table <name> ...``
    - REF: ``Ref: ...`` or ``Ref <name>: ...``
    - ENUM / PROJECT / TABLE_GROUP: block keywords followed by a name
    - INDEXES: ``Indexes {``
    - NOTE: ``Note: ...`` line inside a table body
    - BRACE: a lone ``{`` or ``}``
    - COLUMN_LIKE: ``<name> <type>...`` (bare or quoted name)
    - UNKNOWN: anything else
    """

    # Modeled constructs
    TABLE = "table"
    REF = "ref"
    COLUMN_LIKE = "column_like"
    NOTE = "note"

    # Recognized but not modeled
    ENUM = "enum"
    PROJECT = "project"
    TABLE_GROUP = "table_group"
    INDEXES = "indexes"

    # Other
    BRACE = "brace"
    UNKNOWN = "unknown"

    def is_modeled(self) -> bool:
        """Check if this kind produces model entities.

        Returns:
            True if the construct is turned into tables, columns or
            references, False otherwise.
        """
        return self in [
            LineKind.TABLE,
            LineKind.REF,
            LineKind.COLUMN_LIKE,
            LineKind.NOTE,
        ]

    def is_unmodeled_block(self) -> bool:
        """Check if this kind opens a block that is recognized but skipped.

        Returns:
            True for Enum, Project, TableGroup and Indexes.
        """
        return self in [
            LineKind.ENUM,
            LineKind.PROJECT,
            LineKind.TABLE_GROUP,
            LineKind.INDEXES,
        ]

    @property
    def feature_tag(self) -> str:
        """Return the feature tag reported in parse metadata."""
        return _FEATURE_TAGS.get(self, self.value)


_FEATURE_TAGS = {
    LineKind.ENUM: "enums",
    LineKind.PROJECT: "projects",
    LineKind.TABLE_GROUP: "table_groups",
    LineKind.INDEXES: "indexes",
}
