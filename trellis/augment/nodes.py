"""Query fields, CRUD mutations and primary-key inputs for node types."""

import logging

from graphql.language import FieldDefinitionNode, ObjectTypeDefinitionNode

from .builders import (
    append_to,
    argument_names,
    field_definition,
    get_named_type,
    get_primary_key,
    input_object_type,
    input_value,
    is_computed,
    is_ignored,
    is_list_type,
    is_node_type,
    list_type,
    named_type,
    non_null,
    strip_non_null,
    type_name_of,
)
from .context import MUTATION, QUERY, AugmentationContext
from .filters import filter_type_name, ordering_type_name
from .models import FieldInfo, FieldKind
from .temporal import temporal_input_name, to_input_type

logger = logging.getLogger(__name__)

NODE_MUTATIONS = ("Create", "Update", "Delete")


# -------------------------------------------------------------------------
# Arguments
# -------------------------------------------------------------------------


def possibly_add_argument(field: FieldDefinitionNode, name: str, type_) -> None:
    """Add an argument to a field unless one of that name exists."""
    if name not in argument_names(field):
        append_to(field, "arguments", input_value(name, type_))


def add_pagination_arguments(field: FieldDefinitionNode, type_name: str) -> None:
    possibly_add_argument(field, "first", named_type("Int"))
    possibly_add_argument(field, "offset", named_type("Int"))
    possibly_add_argument(
        field, "orderBy", list_type(named_type(ordering_type_name(type_name)))
    )


def add_node_field_arguments(
    ctx: AugmentationContext, field: FieldDefinitionNode, type_name: str
) -> None:
    """Pagination for list fields, plus a filter unless the field is computed."""
    if is_list_type(field.type):
        add_pagination_arguments(field, type_name)
    if not is_computed(field):
        possibly_add_argument(field, "filter", named_type(filter_type_name(type_name)))


# -------------------------------------------------------------------------
# Node type fields
# -------------------------------------------------------------------------


def add_or_replace_node_id_field(node: ObjectTypeDefinitionNode) -> None:
    """Put a reserved '_id: String' field on a node type."""
    definition = field_definition("_id", named_type("String"))
    fields = list(node.fields or [])
    for index, f in enumerate(fields):
        if f.name.value == "_id":
            if not is_ignored(f):
                fields[index] = definition
            break
    else:
        fields.append(definition)
    node.fields = tuple(fields)


def add_relation_field_arguments(ctx: AugmentationContext, infos: list[FieldInfo]) -> None:
    """Add pagination and filter arguments to relation and computed node fields."""
    for info in infos:
        if info.ignored or info.kind not in (FieldKind.NODE, FieldKind.NODE_RELATION):
            continue
        if info.kind == FieldKind.NODE and not info.computed:
            continue
        if not ctx.policy.should_augment_type(QUERY, info.type_name):
            continue
        add_node_field_arguments(ctx, info.field, info.type_name)


def augment_node_type(
    ctx: AugmentationContext, node: ObjectTypeDefinitionNode
) -> ObjectTypeDefinitionNode:
    if ctx.policy.should_augment_type(QUERY, node.name.value):
        add_or_replace_node_id_field(node)
    return node


# -------------------------------------------------------------------------
# Query API
# -------------------------------------------------------------------------


def build_query_arguments(infos: list[FieldInfo]) -> list:
    """One optional argument per stored scalar, enum or temporal field."""
    args = []
    for info in infos:
        if not info.is_stored_value:
            continue
        if info.kind == FieldKind.TEMPORAL:
            type_ = named_type(temporal_input_name(info.type_name))
        else:
            type_ = named_type(info.type_name)
        args.append(input_value(info.name, type_))
    return args


def possibly_add_query(
    ctx: AugmentationContext, node: ObjectTypeDefinitionNode, infos: list[FieldInfo]
) -> None:
    type_name = node.name.value
    if type_name in ctx.operation_fields(QUERY):
        return
    directives = ctx.policy_directives("node", "Read", type_name)
    append_to(
        ctx.root_type(QUERY),
        "fields",
        field_definition(
            type_name,
            list_type(named_type(type_name)),
            arguments=build_query_arguments(infos),
            directives=directives,
        ),
    )
    logger.debug("Added query %s", type_name)


def augment_query_arguments(ctx: AugmentationContext) -> None:
    """Add first/offset/orderBy/filter to root queries returning node types."""
    for f in ctx.operation_fields(QUERY).values():
        value_type_name = type_name_of(f)
        if not is_node_type(ctx.type_map.get(value_type_name)):
            continue
        if not ctx.policy.should_augment_type(QUERY, value_type_name):
            continue
        add_node_field_arguments(ctx, f, value_type_name)


# -------------------------------------------------------------------------
# Mutation API
# -------------------------------------------------------------------------


def build_create_arguments(infos: list[FieldInfo]) -> list:
    """Every stored value field; the first required ID becomes optional."""
    args = []
    id_claimed = False
    for info in infos:
        if info.is_system or not info.is_stored_value:
            continue
        type_ = info.field.type
        if (
            not id_claimed
            and info.is_non_null
            and not info.is_list
            and info.type_name == "ID"
        ):
            id_claimed = True
            type_ = named_type("ID")
        args.append(input_value(info.name, to_input_type(type_)))
    return args


def build_update_arguments(
    primary_key: FieldDefinitionNode, infos: list[FieldInfo]
) -> list:
    """The required primary key, then every other value field made optional."""
    pk_name = primary_key.name.value
    args = [
        input_value(info.name, to_input_type(strip_non_null(info.field.type)))
        for info in infos
        if info.name != pk_name and not info.is_system and info.is_stored_value
    ]
    if not args:
        return []
    pk_arg = input_value(pk_name, non_null(named_type(type_name_of(primary_key))))
    return [pk_arg, *args]


def build_delete_arguments(primary_key: FieldDefinitionNode) -> list:
    return [
        input_value(
            primary_key.name.value, non_null(named_type(type_name_of(primary_key)))
        )
    ]


def build_mutation_arguments(
    action: str, node: ObjectTypeDefinitionNode, infos: list[FieldInfo]
) -> list:
    if action == "Create":
        return build_create_arguments(infos)
    primary_key = get_primary_key(node)
    if primary_key is None:
        return []
    if action == "Update":
        return build_update_arguments(primary_key, infos)
    return build_delete_arguments(primary_key)


def possibly_add_type_mutations(
    ctx: AugmentationContext, node: ObjectTypeDefinitionNode, infos: list[FieldInfo]
) -> None:
    """Add Create/Update/Delete<Type>, skipping names that exist."""
    type_name = node.name.value
    existing = ctx.operation_fields(MUTATION)
    for action in NODE_MUTATIONS:
        mutation_name = f"{action}{type_name}"
        if mutation_name in existing:
            continue
        args = build_mutation_arguments(action, node, infos)
        if not args:
            logger.debug("No arguments for %s, skipped", mutation_name)
            continue
        append_to(
            ctx.root_type(MUTATION),
            "fields",
            field_definition(
                mutation_name,
                named_type(type_name),
                arguments=args,
                directives=ctx.policy_directives("node", action, type_name),
            ),
        )
        logger.debug("Added mutation %s", mutation_name)


def possibly_add_node_input(
    ctx: AugmentationContext, node: ObjectTypeDefinitionNode
) -> None:
    """Add _<Type>Input holding exactly the required primary key."""
    name = f"_{node.name.value}Input"
    if name in ctx.type_map:
        return
    primary_key = get_primary_key(node)
    if primary_key is None:
        return
    pk_type = temporal_input_name(get_named_type(primary_key.type).name.value)
    ctx.type_map[name] = input_object_type(
        name, [input_value(primary_key.name.value, non_null(named_type(pk_type)))]
    )


def has_primary_key_input(ctx: AugmentationContext, type_name: str) -> bool:
    """Check whether a type has, or will get, its _<Type>Input."""
    if f"_{type_name}Input" in ctx.type_map:
        return True
    node = ctx.type_map.get(type_name)
    return is_node_type(node) and get_primary_key(node) is not None

