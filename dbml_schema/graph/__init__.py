"""
Reference graph module.

This package contains the networkx based ReferenceGraph used to analyze
relationships between the tables of a schema.
"""

from dbml_schema.graph.reference_graph import ReferenceGraph

__all__ = [
    "ReferenceGraph",
]
