"""Builder for converting a type map to a RelationshipGraph."""

import copy

from ..augment.builders import is_interface_type, is_node_type
from ..augment.classify import classify_fields
from ..augment.models import FieldKind
from ..augment.relations import add_relation_type_directives, resolve_relationship
from ..augment.temporal import TEMPORAL_TYPE_NAMES
from .edge_types import NodeType, Notation
from .relationship_graph import RelationshipGraph


def build_relationship_graph(type_map: dict) -> RelationshipGraph:
    """Build a RelationshipGraph from a type map.

    Relationship types are normalized on a copy first, so the map passed
    in is left as it was.

    Args:
        type_map: Name-keyed type and directive definitions.

    Returns:
        A RelationshipGraph with one edge per logical relationship.

    Raises:
        RelationshipStructureError: If a relationship type lacks an endpoint.
        RelationshipDirectionError: If a relationship field's owner is not
            one of the relationship's endpoints.
    """
    type_map = add_relation_type_directives(copy.deepcopy(type_map))
    graph = RelationshipGraph()

    # Add all node types first
    for type_name, node in type_map.items():
        if type_name in TEMPORAL_TYPE_NAMES:
            continue
        if is_node_type(node):
            graph.add_type(type_name, NodeType.NODE)
        elif is_interface_type(node):
            graph.add_type(type_name, NodeType.INTERFACE)

    # Add relationships (after all types exist)
    for type_name, node in type_map.items():
        if type_name in TEMPORAL_TYPE_NAMES or not is_node_type(node):
            continue
        for info in classify_fields(node, type_map):
            relationship = resolve_relationship(type_name, info, type_map)
            if relationship is None:
                continue
            if info.kind == FieldKind.RELATION_TYPE:
                notation = Notation.RELATION_TYPE
            else:
                notation = Notation.FIELD_DIRECTIVE
            graph.add_relationship(
                relationship.name,
                relationship.from_type,
                relationship.to_type,
                notation,
                field=f"{type_name}.{info.name}",
                relation_type=relationship.relation_type,
            )

    return graph
