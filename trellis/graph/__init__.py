"""Graph layer for representing schema relationships as networkx graphs."""

from .edge_types import NodeType, Notation
from .relationship_graph import RelationshipEdge, RelationshipGraph
from .builder import build_relationship_graph

__all__ = [
    "NodeType",
    "Notation",
    "RelationshipEdge",
    "RelationshipGraph",
    "build_relationship_graph",
]
