"""
Column model.

This module defines the Column class, which represents a single column
declaration inside a table body, including its type, constraint flags,
default value, note and any settings the parser does not interpret.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

CustomProperties = Dict[str, Union[str, bool]]


@dataclass
class Column:
    """A column declared inside a table body.

    Columns are created by the parser in declaration order and are only
    mutated during the parse pass that created them (a later standalone
    reference may set ``foreign_key``).

    Attributes:
        id: Identifier unique within one parse result (e.g. "col_3").
        name: Column name. Either a bare identifier or, when ``quoted_name``
            is True, an arbitrary literal that was written in quotes.
        type: Free-form type string, possibly with a parenthesized suffix
            such as "varchar(255)" or "decimal(10,2)".
        primary_key: Column carries the ``pk`` setting.
        not_null: Column carries the ``not null`` setting.
        unique: Column carries the ``unique`` setting.
        foreign_key: Column is the "from" side of at least one reference.
        default: Raw default literal with outer quotes removed.
        note: Column note with escapes resolved.
        custom_properties: Settings outside the known vocabulary, mapped to
            their raw value or to True for bare flags.
        quoted_name: Whether the name was written as a quoted literal.

    Example:
        >>> col = Column(id="col_0", name="id", type="integer", primary_key=True)
        >>> col.has_settings()
        True
    """

    id: str
    name: str
    type: str
    primary_key: bool = False
    not_null: bool = False
    unique: bool = False
    foreign_key: bool = False
    default: Optional[str] = None
    note: Optional[str] = None
    custom_properties: CustomProperties = field(default_factory=dict)
    quoted_name: bool = False

    def has_settings(self) -> bool:
        """Check whether the column would render a settings list.

        Returns:
            True if any flag, default, note or custom property is set.
        """
        return (
            self.primary_key
            or self.not_null
            or self.unique
            or self.default is not None
            or bool(self.note)
            or bool(self.custom_properties)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation of the Column.
        """
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "primary_key": self.primary_key,
            "not_null": self.not_null,
            "unique": self.unique,
            "foreign_key": self.foreign_key,
            "default": self.default,
            "note": self.note,
            "custom_properties": dict(self.custom_properties),
            "quoted_name": self.quoted_name,
        }
