"""Node and edge type definitions for the relationship graph."""

from enum import Enum


class NodeType(str, Enum):
    """Types of nodes in the relationship graph."""

    NODE = "node"  # a node type of the schema
    INTERFACE = "interface"
    UNKNOWN = "unknown"  # referenced but not defined


class Notation(str, Enum):
    """How a relationship was declared."""

    RELATION_TYPE = "relation_type"  # type with from/to fields
    FIELD_DIRECTIVE = "field_directive"  # @relation on a node-valued field
