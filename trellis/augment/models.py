"""Data models for schema augmentation."""

from dataclasses import dataclass, field
from enum import Enum

from graphql.language import DefinitionNode, FieldDefinitionNode

from ..schema.loader import print_type_map
from .builders import is_system_field


class FieldKind(Enum):
    """What a field's value type is, as far as generation is concerned."""

    SCALAR = "scalar"  # ID, String, Int, Float, Boolean
    CUSTOM_SCALAR = "custom_scalar"
    ENUM = "enum"
    TEMPORAL = "temporal"  # _Neo4jDateTime and friends
    NODE = "node"  # node type, no @relation on the field
    NODE_RELATION = "node_relation"  # node type, @relation on the field
    RELATION_TYPE = "relation_type"  # a relationship type
    OTHER = "other"


VALUE_KINDS = frozenset(
    {FieldKind.SCALAR, FieldKind.CUSTOM_SCALAR, FieldKind.ENUM, FieldKind.TEMPORAL}
)
ORDERABLE_KINDS = frozenset({FieldKind.SCALAR, FieldKind.ENUM, FieldKind.TEMPORAL})


@dataclass(frozen=True)
class FieldInfo:
    """A field of a type, classified once per type pass."""

    field: FieldDefinitionNode
    kind: FieldKind
    type_name: str
    is_list: bool
    is_non_null: bool
    ignored: bool = False
    computed: bool = False

    @property
    def name(self) -> str:
        return self.field.name.value

    @property
    def is_system(self) -> bool:
        return is_system_field(self.name)

    @property
    def is_stored_value(self) -> bool:
        """A stored scalar-like value: usable as a mutation or input argument."""
        return (
            self.kind in VALUE_KINDS
            and not self.ignored
            and not self.computed
        )

    @property
    def is_orderable(self) -> bool:
        return (
            self.kind in ORDERABLE_KINDS
            and not self.is_list
            and not self.ignored
            and not self.computed
        )


@dataclass(frozen=True)
class Relationship:
    """A resolved relationship between two node types.

    The same logical edge resolves to the same (name, from_type, to_type)
    whether it was declared as a relationship type or as a field directive.
    """

    name: str
    from_type: str
    to_type: str
    relation_type: str | None = None  # set for the relationship type notation

    @property
    def is_reflexive(self) -> bool:
        return self.from_type == self.to_type

    def involves(self, type_name: str) -> bool:
        return type_name in (self.from_type, self.to_type)


@dataclass
class AugmentationResult:
    """An augmented type map and what the augmentation added to it."""

    type_map: dict[str, DefinitionNode]
    resolvers: dict[str, dict] = field(default_factory=dict)
    added_types: list[str] = field(default_factory=list)
    queries: list[str] = field(default_factory=list)
    mutations: list[str] = field(default_factory=list)

    @property
    def sdl(self) -> str:
        """The augmented schema printed as SDL."""
        return print_type_map(self.type_map)

    @property
    def total_operations(self) -> int:
        return len(self.queries) + len(self.mutations)
