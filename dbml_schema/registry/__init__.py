"""
Table registry module.

This package contains the TableRegistry used by the parser to track the
tables declared so far and resolve reference endpoints.
"""

from dbml_schema.registry.table_registry import TableRegistry

__all__ = ["TableRegistry"]
