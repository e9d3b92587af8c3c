"""Output formatting for augmentation results and relationship graphs."""

import json
from typing import Literal

from ..augment.models import AugmentationResult
from ..graph.edge_types import NodeType
from ..graph.relationship_graph import RelationshipGraph


def format_augmentation_result(
    result: AugmentationResult,
    format: Literal["sdl", "json"] = "sdl",
) -> str:
    """Format an augmentation result for output.

    Args:
        result: The augmentation result to format.
        format: Output format ("sdl" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_result_json(result)
    return result.sdl


def _format_result_json(result: AugmentationResult) -> str:
    """Format result as a JSON summary with the SDL included."""
    data = {
        "added_type_count": len(result.added_types),
        "query_count": len(result.queries),
        "mutation_count": len(result.mutations),
        "added_types": result.added_types,
        "queries": result.queries,
        "mutations": result.mutations,
        "sdl": result.sdl,
    }
    return json.dumps(data, indent=2)


def format_relationships(
    graph: RelationshipGraph,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format a relationship graph for output.

    Args:
        graph: The relationship graph to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_relationships_json(graph)
    return _format_relationships_text(graph)


def _format_relationships_text(graph: RelationshipGraph) -> str:
    """Format relationships as human-readable text."""
    lines: list[str] = []
    edges = list(graph.iter_relationships())

    lines.append("RELATIONSHIPS:")
    if edges:
        for edge in edges:
            notations = ", ".join(sorted(n.value for n in edge.notations))
            lines.append(
                f"  {edge.name}: {edge.from_type} -> {edge.to_type} ({notations})"
            )
            for field_ref in edge.fields:
                lines.append(f"    via {field_ref}")
    else:
        lines.append("  (none)")

    unconnected = sorted(graph.get_unconnected_types())
    if unconnected:
        lines.append("")
        lines.append("UNCONNECTED TYPES:")
        for name in unconnected:
            lines.append(f"  {name}")

    lines.append("")
    lines.append(
        f"{len(edges)} relationship(s) between "
        f"{len(graph.get_type_names(NodeType.NODE))} node type(s)"
    )
    return "\n".join(lines)


def _format_relationships_json(graph: RelationshipGraph) -> str:
    """Format relationships as JSON."""
    data = {
        "node_types": sorted(graph.get_type_names(NodeType.NODE)),
        "relationships": [
            {
                "name": edge.name,
                "from": edge.from_type,
                "to": edge.to_type,
                "notations": sorted(n.value for n in edge.notations),
                "fields": edge.fields,
                "relation_type": edge.relation_type,
            }
            for edge in graph.iter_relationships()
        ],
    }
    return json.dumps(data, indent=2)
