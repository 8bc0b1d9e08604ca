"""
Configuration models for parsing and generation.

This module defines the ErrorMode enum and the ParserConfig and
GeneratorOptions dataclasses, which control how the parser treats inline
references and unknown settings and how the generator lays out its output.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional


class ErrorMode(str, Enum):
    """Enumeration of handling modes for optional checks.

    Attributes:
        FAIL: Report an error and drop the offending construct.
        WARN: Report a warning and keep the construct.
        IGNORE: Skip the check entirely.

    Example:
        >>> ErrorMode.values()
        ['fail', 'warn', 'ignore']
    """

    FAIL = "fail"
    WARN = "warn"
    IGNORE = "ignore"

    @classmethod
    def values(cls) -> list[str]:
        """Return a list of all possible error mode values.

        Returns:
            List of string values for all error modes in the enum.
        """
        return [member.value for member in cls]


@dataclass
class ParserConfig:
    """Configuration settings for the structural parser.

    Attributes:
        inline_reference_check: How to treat inline ``ref:`` targets that do
            not name a declared table and column once the whole document has
            been read. Defaults to ErrorMode.IGNORE, which keeps inline
            references unchecked.
        report_unknown_settings: If True, settings outside the known
            vocabulary produce a warning in addition to being kept as custom
            properties. Defaults to True.

    Example:
        >>> config = ParserConfig(inline_reference_check=ErrorMode.WARN)
        >>> config.report_unknown_settings
        True
    """

    inline_reference_check: ErrorMode = ErrorMode.IGNORE
    report_unknown_settings: bool = True

    def __post_init__(self) -> None:
        """Validate configuration settings."""
        if not isinstance(self.inline_reference_check, ErrorMode):
            raise TypeError("inline_reference_check must be an ErrorMode instance")
        if not isinstance(self.report_unknown_settings, bool):
            raise TypeError("report_unknown_settings must be a boolean")


# camelCase option names used by editor callers
_CAMEL_CASE_OPTIONS = {
    "includeComments": "include_comments",
    "includeMetadata": "include_metadata",
    "indentSize": "indent_size",
    "preserveCustomProperties": "preserve_custom_properties",
    "formatOutput": "format_output",
}


@dataclass
class GeneratorOptions:
    """Output options for the generator.

    Attributes:
        include_comments: Emit notes and ``//`` comment lines. When False,
            table and column notes are omitted as well. Defaults to True.
        include_metadata: Emit the header and statistics footer (only when
            include_comments is also True). Defaults to True.
        indent_size: Number of spaces used to indent table bodies.
            Defaults to 2.
        preserve_custom_properties: Re-emit settings the parser kept as
            custom properties. Defaults to True.
        format_output: Separate top-level blocks with blank lines. When
            False, output is compact with one construct per line.
            Defaults to True.

    Example:
        >>> options = GeneratorOptions.from_dict({"indentSize": 4})
        >>> options.indent
        '    '
    """

    include_comments: bool = True
    include_metadata: bool = True
    indent_size: int = 2
    preserve_custom_properties: bool = True
    format_output: bool = True

    def __post_init__(self) -> None:
        """Validate configuration settings."""
        for name in (
            "include_comments",
            "include_metadata",
            "preserve_custom_properties",
            "format_output",
        ):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be a boolean")
        if isinstance(self.indent_size, bool) or not isinstance(self.indent_size, int):
            raise TypeError("indent_size must be an integer")
        if self.indent_size < 0:
            raise ValueError("indent_size must not be negative")

    @property
    def indent(self) -> str:
        """Return the indentation string for table bodies."""
        return " " * self.indent_size

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GeneratorOptions":
        """Build options from a mapping with snake_case or camelCase keys.

        Unknown keys are ignored.

        Args:
            data: Option mapping, or None for defaults.

        Returns:
            GeneratorOptions instance.
        """
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_CASE_OPTIONS.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)
