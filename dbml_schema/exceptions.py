"""
Custom exception classes for the schema notation toolkit.

Parsing never raises: problems found in the input are reported as
diagnostics on the ParseResult. The exceptions defined here cover the
remaining failure paths, serialization of a schema that cannot be expressed
in the notation and reading schema files from the command line.
"""

from typing import Optional


class SchemaNotationError(Exception):
    """Base exception class for all schema notation errors.

    Attributes:
        message: Human-readable error message describing the error.
    """

    def __init__(self, message: str) -> None:
        """Initialize a SchemaNotationError with a message.

        Args:
            message: Error message describing what went wrong.
        """
        self.message = message
        super().__init__(self.message)


class GenerationError(SchemaNotationError):
    """Exception raised when a schema cannot be serialized.

    Raised by the generator for entities that have no textual form, such as
    a table without a name or a column without a type. ``generate`` catches
    it and reports ``success=False``.

    Attributes:
        message: Error message describing the failure.
        table_name: Name of the table being generated, if known.
        column_name: Name of the column being generated, if applicable.
    """

    def __init__(
        self,
        message: str,
        table_name: Optional[str] = None,
        column_name: Optional[str] = None,
    ) -> None:
        """Initialize a GenerationError.

        Args:
            message: Error message describing the failure.
            table_name: Optional name of the offending table.
            column_name: Optional name of the offending column.
        """
        super().__init__(message)
        self.table_name = table_name
        self.column_name = column_name


class SchemaFileError(SchemaNotationError):
    """Exception raised when a schema file cannot be read or written.

    Attributes:
        message: Error message describing the failure.
        path: Path of the file involved.
    """

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path
