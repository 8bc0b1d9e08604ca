"""
Reference graph for schema analysis.

This module defines the ReferenceGraph class, which uses networkx to model
tables as nodes and references as edges, and answers structural questions
about a parsed schema.
"""

from __future__ import annotations

from typing import Any, Optional

import networkx as nx

from dbml_schema.models.reference import Reference
from dbml_schema.models.schema import DatabaseSchema
from dbml_schema.models.table import Table


class ReferenceGraph:
    """Table-level reference graph.

    Every table of the schema is a node, in declaration order. Every
    reference is an edge from its "from" table to its "to" table, keyed by
    reference id, so parallel references between the same tables are kept.
    Endpoints naming a table that is not declared get a node with
    ``declared=False``.

    Attributes:
        schema: The schema the graph was built from.
        graph: networkx MultiDiGraph object.

    Example:
        >>> graph = ReferenceGraph(schema)
        >>> [ref.from_table for ref in graph.referenced_by("users")]
        ['posts']
    """

    def __init__(self, schema: DatabaseSchema) -> None:
        """Initialize a ReferenceGraph.

        Args:
            schema: DatabaseSchema to analyze.
        """
        self.schema = schema
        self.graph = nx.MultiDiGraph()

        for table in schema.tables:
            self.graph.add_node(table.qualified_name, declared=True, table=table)

        for reference in schema.references:
            source = self._node_for(reference.from_table, reference.from_schema)
            target = self._node_for(reference.to_table, reference.to_schema)
            self.graph.add_edge(source, target, key=reference.id, reference=reference)

    def _resolve(self, name: str, schema: Optional[str]) -> Optional[Table]:
        return self.schema.get_table(name, schema)

    def _node_for(self, name: str, schema: Optional[str]) -> str:
        table = self._resolve(name, schema)
        if table is not None:
            return table.qualified_name
        node = f"{schema}.{name}" if schema else name
        if node not in self.graph:
            self.graph.add_node(node, declared=False, table=None)
        return node

    def _node_of(self, table_name: str) -> Optional[str]:
        if table_name in self.graph:
            return table_name
        schema, _, name = table_name.rpartition(".")
        table = self._resolve(name, schema or None)
        return table.qualified_name if table is not None else None

    # ========== Queries ==========

    def dangling_references(self) -> list[Reference]:
        """Return references whose target table or column is not declared.

        The structural parser only checks standalone references, so this
        mostly finds inline references pointing at missing tables or
        columns.

        Returns:
            References in declaration order.
        """
        dangling = []
        for reference in self.schema.references:
            source = self._resolve(reference.from_table, reference.from_schema)
            target = self._resolve(reference.to_table, reference.to_schema)
            if (
                source is None
                or target is None
                or not source.has_column(reference.from_column)
                or not target.has_column(reference.to_column)
            ):
                dangling.append(reference)
        return dangling

    def isolated_tables(self) -> list[str]:
        """Return tables that neither reference nor are referenced by another.

        A table that only references itself counts as isolated as well.

        Returns:
            Qualified table names in declaration order.
        """
        isolated = []
        for table in self.schema.tables:
            node = table.qualified_name
            neighbors = set(self.graph.successors(node)) | set(
                self.graph.predecessors(node)
            )
            neighbors.discard(node)
            if not neighbors:
                isolated.append(node)
        return isolated

    def cycles(self) -> list[list[str]]:
        """Return reference cycles between tables.

        Self-references (for example ``employees.manager_id``) are reported
        as single-table cycles. Each cycle starts at its smallest table name
        and cycles are sorted, so the result is deterministic.

        Returns:
            List of cycles, each a list of qualified table names.
        """
        simple = nx.DiGraph(self.graph)
        cycles = []
        for cycle in nx.simple_cycles(simple):
            start = cycle.index(min(cycle))
            cycles.append(cycle[start:] + cycle[:start])
        return sorted(cycles)

    def referenced_by(self, table_name: str) -> list[Reference]:
        """Return references pointing at a table.

        Args:
            table_name: Table name, optionally schema-qualified.

        Returns:
            References in declaration order.
        """
        node = self._node_of(table_name)
        if node is None:
            return []
        return self._ordered(
            data["reference"] for _, _, data in self.graph.in_edges(node, data=True)
        )

    def references_from(self, table_name: str) -> list[Reference]:
        """Return references declared from a table.

        Args:
            table_name: Table name, optionally schema-qualified.

        Returns:
            References in declaration order.
        """
        node = self._node_of(table_name)
        if node is None:
            return []
        return self._ordered(
            data["reference"] for _, _, data in self.graph.out_edges(node, data=True)
        )

    def _ordered(self, references: Any) -> list[Reference]:
        wanted = {id(reference) for reference in references}
        return [ref for ref in self.schema.references if id(ref) in wanted]

    # ========== Export ==========

    def get_statistics(self) -> dict[str, int]:
        """Get graph statistics.

        Returns:
            Dictionary with table, reference, dangling, isolated and cycle
            counts.
        """
        return {
            "tables": len(self.schema.tables),
            "references": self.graph.number_of_edges(),
            "undeclared_tables": sum(
                1 for _, data in self.graph.nodes(data=True) if not data["declared"]
            ),
            "dangling_references": len(self.dangling_references()),
            "isolated_tables": len(self.isolated_tables()),
            "cycles": len(self.cycles()),
        }

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Export graph to dictionary format.

        Returns:
            Dictionary containing nodes and edges.
        """
        return {
            "nodes": [
                {"id": node, "declared": data["declared"]}
                for node, data in self.graph.nodes(data=True)
            ],
            "edges": [
                {
                    "source": u,
                    "target": v,
                    "reference": key,
                    "type": data["reference"].type.value,
                }
                for u, v, key, data in self.graph.edges(keys=True, data=True)
            ],
        }
