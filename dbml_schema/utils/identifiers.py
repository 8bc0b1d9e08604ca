"""
Identifier rules shared by the parser, the generator and the SQL export.
"""

import re

IDENTIFIER = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def is_valid_identifier(name: str) -> bool:
    """Check a table, schema or bare column name.

    Args:
        name: Candidate identifier.

    Returns:
        True if the name matches ``^[a-zA-Z_][a-zA-Z0-9_]*$``.

    Example:
        >>> is_valid_identifier("user_id"), is_valid_identifier("1bad")
        (True, False)
    """
    return bool(IDENTIFIER.match(name))
