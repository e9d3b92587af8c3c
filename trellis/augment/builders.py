"""Typed builders and predicates over graphql-core AST nodes."""

from typing import Iterable, Sequence

from graphql.language import (
    ArgumentNode,
    DirectiveDefinitionNode,
    DirectiveNode,
    EnumTypeDefinitionNode,
    EnumValueDefinitionNode,
    EnumValueNode,
    FieldDefinitionNode,
    InputObjectTypeDefinitionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    ListTypeNode,
    ListValueNode,
    NamedTypeNode,
    NameNode,
    Node,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    StringValueNode,
    TypeNode,
    ValueNode,
)

BASIC_SCALARS = frozenset({"ID", "String", "Int", "Float", "Boolean"})
ROOT_TYPE_NAMES = frozenset({"Query", "Mutation", "Subscription"})
SYSTEM_FIELDS = frozenset({"_id", "from", "to"})

RELATION_DIRECTIVE = "relation"
MUTATION_META_DIRECTIVE = "MutationMeta"
CYPHER_DIRECTIVE = "cypher"
IGNORE_DIRECTIVE = "neo4j_ignore"


# -------------------------------------------------------------------------
# Node construction
# -------------------------------------------------------------------------


def name_node(value: str) -> NameNode:
    return NameNode(value=value)


def named_type(name: str) -> NamedTypeNode:
    return NamedTypeNode(name=name_node(name))


def list_type(of_type: TypeNode) -> ListTypeNode:
    return ListTypeNode(type=of_type)


def non_null(of_type: TypeNode) -> NonNullTypeNode:
    if isinstance(of_type, NonNullTypeNode):
        return of_type
    return NonNullTypeNode(type=of_type)


def string_value(value: str) -> StringValueNode:
    return StringValueNode(value=value, block=False)


def argument(name: str, value: ValueNode) -> ArgumentNode:
    return ArgumentNode(name=name_node(name), value=value)


def directive(name: str, /, **arguments: str | list[str]) -> DirectiveNode:
    """Build a directive whose arguments are strings or lists of strings."""
    args = []
    for arg_name, value in arguments.items():
        if isinstance(value, list):
            node: ValueNode = ListValueNode(values=tuple(string_value(v) for v in value))
        else:
            node = string_value(value)
        args.append(argument(arg_name, node))
    return DirectiveNode(name=name_node(name), arguments=tuple(args))


def relation_directive(name: str, from_type: str, to_type: str) -> DirectiveNode:
    return directive(RELATION_DIRECTIVE, name=name, **{"from": from_type, "to": to_type})


def mutation_meta_directive(
    relationship: str, from_type: str, to_type: str
) -> DirectiveNode:
    return directive(
        MUTATION_META_DIRECTIVE,
        relationship=relationship,
        **{"from": from_type, "to": to_type},
    )


def input_value(
    name: str, type_: TypeNode, directives: Sequence[DirectiveNode] = ()
) -> InputValueDefinitionNode:
    return InputValueDefinitionNode(
        name=name_node(name),
        type=type_,
        directives=tuple(directives),
        default_value=None,
        description=None,
    )


def field_definition(
    name: str,
    type_: TypeNode,
    arguments: Sequence[InputValueDefinitionNode] = (),
    directives: Sequence[DirectiveNode] = (),
) -> FieldDefinitionNode:
    return FieldDefinitionNode(
        name=name_node(name),
        type=type_,
        arguments=tuple(arguments),
        directives=tuple(directives),
        description=None,
    )


def object_type(
    name: str,
    fields: Sequence[FieldDefinitionNode] = (),
    directives: Sequence[DirectiveNode] = (),
) -> ObjectTypeDefinitionNode:
    return ObjectTypeDefinitionNode(
        name=name_node(name),
        fields=tuple(fields),
        directives=tuple(directives),
        interfaces=(),
        description=None,
    )


def input_object_type(
    name: str, fields: Sequence[InputValueDefinitionNode]
) -> InputObjectTypeDefinitionNode:
    return InputObjectTypeDefinitionNode(
        name=name_node(name),
        fields=tuple(fields),
        directives=(),
        description=None,
    )


def enum_type(name: str, values: Iterable[str]) -> EnumTypeDefinitionNode:
    return EnumTypeDefinitionNode(
        name=name_node(name),
        values=tuple(
            EnumValueDefinitionNode(name=name_node(v), directives=(), description=None)
            for v in values
        ),
        directives=(),
        description=None,
    )


def directive_definition(
    name: str,
    locations: Sequence[str],
    arguments: Sequence[InputValueDefinitionNode] = (),
) -> DirectiveDefinitionNode:
    return DirectiveDefinitionNode(
        name=name_node(name),
        arguments=tuple(arguments),
        locations=tuple(name_node(loc) for loc in locations),
        repeatable=False,
        description=None,
    )


def append_to(node: Node, attr: str, *items: Node) -> None:
    """Append items to a sequence attribute of a node, keeping it a tuple."""
    setattr(node, attr, (*(getattr(node, attr) or ()), *items))


# -------------------------------------------------------------------------
# Type node inspection
# -------------------------------------------------------------------------


def get_named_type(type_: TypeNode) -> NamedTypeNode:
    """Unwrap list and non-null layers down to the named type."""
    while not isinstance(type_, NamedTypeNode):
        type_ = type_.type
    return type_


def type_name_of(node: FieldDefinitionNode | InputValueDefinitionNode) -> str:
    return get_named_type(node.type).name.value


def is_list_type(type_: TypeNode) -> bool:
    """Check whether a list layer appears anywhere above the named type."""
    while not isinstance(type_, NamedTypeNode):
        if isinstance(type_, ListTypeNode):
            return True
        type_ = type_.type
    return False


def is_non_null_type(type_: TypeNode) -> bool:
    return isinstance(type_, NonNullTypeNode)


def strip_non_null(type_: TypeNode) -> TypeNode:
    """Remove the outermost non-null layer only."""
    if isinstance(type_, NonNullTypeNode):
        return type_.type
    return type_


def strip_all_non_null(type_: TypeNode) -> TypeNode:
    """Rebuild a type with every non-null layer removed."""
    if isinstance(type_, NonNullTypeNode):
        return strip_all_non_null(type_.type)
    if isinstance(type_, ListTypeNode):
        return list_type(strip_all_non_null(type_.type))
    return named_type(type_.name.value)


def rename_leaf(type_: TypeNode, name: str) -> TypeNode:
    """Rebuild a type with the same wrappers around a different named type."""
    if isinstance(type_, NonNullTypeNode):
        return non_null(rename_leaf(type_.type, name))
    if isinstance(type_, ListTypeNode):
        return list_type(rename_leaf(type_.type, name))
    return named_type(name)


# -------------------------------------------------------------------------
# Directive and field lookup
# -------------------------------------------------------------------------


def get_directive(node: Node | None, name: str) -> DirectiveNode | None:
    if node is None:
        return None
    for d in getattr(node, "directives", None) or []:
        if d.name.value == name:
            return d
    return None


def get_directive_argument(d: DirectiveNode | None, name: str) -> str | None:
    """Get a scalar directive argument value as a string."""
    if d is None:
        return None
    for arg in d.arguments or []:
        if arg.name.value == name:
            value = arg.value
            if isinstance(value, (StringValueNode, EnumValueNode)):
                return value.value
            return getattr(value, "value", None)
    return None


def get_field(node: Node | None, name: str):
    if node is None:
        return None
    for f in getattr(node, "fields", None) or []:
        if f.name.value == name:
            return f
    return None


def argument_names(field: FieldDefinitionNode) -> list[str]:
    return [a.name.value for a in field.arguments or []]


def is_ignored(field: FieldDefinitionNode) -> bool:
    return get_directive(field, IGNORE_DIRECTIVE) is not None


def is_computed(field: FieldDefinitionNode) -> bool:
    return get_directive(field, CYPHER_DIRECTIVE) is not None


def is_system_field(name: str) -> bool:
    return name in SYSTEM_FIELDS


# -------------------------------------------------------------------------
# Type predicates
# -------------------------------------------------------------------------


def is_object_type(node: Node | None) -> bool:
    return isinstance(node, ObjectTypeDefinitionNode)


def is_interface_type(node: Node | None) -> bool:
    return isinstance(node, InterfaceTypeDefinitionNode)


def is_enum_type(node: Node | None) -> bool:
    return isinstance(node, EnumTypeDefinitionNode)


def has_relation_endpoints(node: Node | None) -> bool:
    """Check whether an object type carries a 'from' or 'to' field."""
    return get_field(node, "from") is not None or get_field(node, "to") is not None


def is_relation_type(node: Node | None) -> bool:
    """An object type marked with @relation or shaped with from/to fields."""
    return is_object_type(node) and (
        get_directive(node, RELATION_DIRECTIVE) is not None
        or has_relation_endpoints(node)
    )


def is_node_type(node: Node | None) -> bool:
    """An object type that is neither a root type nor a relationship type."""
    return (
        is_object_type(node)
        and node.name.value not in ROOT_TYPE_NAMES
        and not is_relation_type(node)
    )


def is_basic_scalar(name: str) -> bool:
    return name in BASIC_SCALARS


def get_primary_key(node: ObjectTypeDefinitionNode) -> FieldDefinitionNode | None:
    """Get the first required, non-list ID field that is not ignored."""
    for f in node.fields or []:
        if (
            not is_ignored(f)
            and is_non_null_type(f.type)
            and not is_list_type(f.type)
            and type_name_of(f) == "ID"
        ):
            return f
    return None


def capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]
