"""RelationshipGraph wrapper around networkx for schema relationships."""

from dataclasses import dataclass, field
from typing import Any, Iterator

import networkx as nx

from .edge_types import NodeType, Notation


@dataclass
class RelationshipEdge:
    """One logical relationship and every field that traverses it."""

    name: str
    from_type: str
    to_type: str
    notations: set[Notation] = field(default_factory=set)
    fields: list[str] = field(default_factory=list)  # "Type.field"
    relation_type: str | None = None

    @property
    def is_reflexive(self) -> bool:
        return self.from_type == self.to_type


class RelationshipGraph:
    """A graph of the relationships between a schema's node types.

    Wraps a networkx MultiDiGraph keyed by relationship name, so the same
    edge declared through both notations is recorded once.
    """

    def __init__(self):
        """Initialize an empty relationship graph."""
        self._graph = nx.MultiDiGraph()

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Node and edge management
    # -------------------------------------------------------------------------

    def add_type(self, name: str, node_type: NodeType = NodeType.NODE, **attrs: Any) -> str:
        """Add a schema type as a graph node.

        Returns:
            The node ID.
        """
        self._graph.add_node(name, node_type=node_type, name=name, **attrs)
        return name

    def add_relationship(
        self,
        name: str,
        from_type: str,
        to_type: str,
        notation: Notation,
        field: str | None = None,
        relation_type: str | None = None,
    ) -> None:
        """Record a relationship, merging it with an existing identical edge.

        Args:
            name: The relationship name.
            from_type: The source node type.
            to_type: The target node type.
            notation: How this occurrence was declared.
            field: The traversing field as "Type.field".
            relation_type: The relationship type, for that notation.
        """
        for node in (from_type, to_type):
            if not self._graph.has_node(node):
                self.add_type(node, NodeType.UNKNOWN)

        if self._graph.has_edge(from_type, to_type, key=name):
            data = self._graph.edges[from_type, to_type, name]
        else:
            self._graph.add_edge(
                from_type, to_type, key=name, notations=set(), fields=[], relation_type=None
            )
            data = self._graph.edges[from_type, to_type, name]

        data["notations"].add(notation)
        if field and field not in data["fields"]:
            data["fields"].append(field)
        if relation_type:
            data["relation_type"] = relation_type

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_type_names(self, node_type: NodeType | None = None) -> list[str]:
        """Get the graph's type names, optionally of one node type."""
        return [
            name
            for name, data in self._graph.nodes(data=True)
            if node_type is None or data.get("node_type") == node_type
        ]

    def get_relationship(
        self, name: str, from_type: str, to_type: str
    ) -> RelationshipEdge | None:
        if not self._graph.has_edge(from_type, to_type, key=name):
            return None
        return self._edge(from_type, to_type, name, self._graph.edges[from_type, to_type, name])

    def has_any_relationships(self, type_name: str) -> bool:
        """Check if a type has any relationships (in or out)."""
        if not self._graph.has_node(type_name):
            return False
        return self._graph.degree(type_name) > 0

    def get_relationships_for_type(self, type_name: str) -> list[dict[str, Any]]:
        """Get all relationships of a type, in both directions."""
        if not self._graph.has_node(type_name):
            return []

        relationships = []
        for _, target, name in self._graph.out_edges(type_name, keys=True):
            relationships.append(
                {"name": name, "target": target, "direction": "outgoing"}
            )
        for source, _, name in self._graph.in_edges(type_name, keys=True):
            if source == type_name:
                continue
            relationships.append(
                {"name": name, "target": source, "direction": "incoming"}
            )
        return relationships

    def get_unconnected_types(self) -> list[str]:
        """Get node types that take part in no relationship."""
        return [
            name
            for name in self.get_type_names(NodeType.NODE)
            if self._graph.degree(name) == 0
        ]

    def iter_relationships(self) -> Iterator[RelationshipEdge]:
        """Iterate over all relationships, sorted by name then endpoints."""
        edges = sorted(
            self._graph.edges(keys=True, data=True),
            key=lambda e: (e[2], e[0], e[1]),
        )
        for source, target, name, data in edges:
            yield self._edge(source, target, name, data)

    @staticmethod
    def _edge(source: str, target: str, name: str, data: dict) -> RelationshipEdge:
        return RelationshipEdge(
            name=name,
            from_type=source,
            to_type=target,
            notations=set(data.get("notations", ())),
            fields=list(data.get("fields", ())),
            relation_type=data.get("relation_type"),
        )
