"""Filter input types and ordering enums for node types."""

import logging

from graphql.language import ObjectTypeDefinitionNode

from .builders import enum_type, input_object_type, input_value, list_type, named_type, non_null
from .context import QUERY, AugmentationContext
from .models import FieldInfo, FieldKind

logger = logging.getLogger(__name__)

STRING_OPERATORS = (
    "",
    "_not",
    "_in",
    "_not_in",
    "_contains",
    "_not_contains",
    "_starts_with",
    "_not_starts_with",
    "_ends_with",
    "_not_ends_with",
)
NUMERIC_OPERATORS = ("", "_not", "_in", "_not_in", "_lt", "_lte", "_gt", "_gte")
BOOLEAN_OPERATORS = ("", "_not")
ENUM_OPERATORS = ("", "_not", "_in", "_not_in")
RELATION_OPERATORS = ("", "_not", "_in", "_not_in")
QUANTIFIER_OPERATORS = ("_some", "_none", "_single", "_every")

_LIST_OPERATORS = frozenset({"_in", "_not_in"})


def filter_type_name(type_name: str) -> str:
    return f"_{type_name}Filter"


def ordering_type_name(type_name: str) -> str:
    return f"_{type_name}Ordering"


def _operator_fields(field_name: str, value_type: str, operators) -> list:
    fields = []
    for op in operators:
        if op in _LIST_OPERATORS:
            type_ = list_type(non_null(named_type(value_type)))
        else:
            type_ = named_type(value_type)
        fields.append(input_value(f"{field_name}{op}", type_))
    return fields


def build_filter_fields(
    ctx: AugmentationContext, type_name: str, infos: list[FieldInfo]
) -> list:
    """Build the comparison operator fields of a node type's filter."""
    filter_name = filter_type_name(type_name)
    fields = [
        input_value("AND", list_type(named_type(filter_name))),
        input_value("OR", list_type(named_type(filter_name))),
    ]

    for info in infos:
        if info.ignored or info.computed or info.is_system:
            continue
        name = info.name

        if info.kind == FieldKind.NODE_RELATION:
            if not ctx.policy.should_augment_type(QUERY, info.type_name):
                continue
            operators = RELATION_OPERATORS
            if info.is_list:
                operators = RELATION_OPERATORS + QUANTIFIER_OPERATORS
            fields.extend(
                _operator_fields(name, filter_type_name(info.type_name), operators)
            )
            continue

        if info.is_list:
            continue

        if info.kind == FieldKind.SCALAR:
            if info.type_name in ("ID", "String"):
                operators = STRING_OPERATORS
            elif info.type_name in ("Int", "Float"):
                operators = NUMERIC_OPERATORS
            else:
                operators = BOOLEAN_OPERATORS
            fields.extend(_operator_fields(name, info.type_name, operators))
        elif info.kind == FieldKind.ENUM:
            fields.extend(_operator_fields(name, info.type_name, ENUM_OPERATORS))

    return fields


def possibly_add_filter_input(
    ctx: AugmentationContext, node: ObjectTypeDefinitionNode, infos: list[FieldInfo]
) -> None:
    type_name = node.name.value
    name = filter_type_name(type_name)
    if name in ctx.type_map:
        return
    ctx.type_map[name] = input_object_type(name, build_filter_fields(ctx, type_name, infos))
    logger.debug("Added filter input %s", name)


def possibly_add_ordering_enum(
    ctx: AugmentationContext, node: ObjectTypeDefinitionNode, infos: list[FieldInfo]
) -> None:
    """Add _<Type>Ordering when the type has at least one orderable field."""
    name = ordering_type_name(node.name.value)
    if name in ctx.type_map:
        return
    values = []
    for info in infos:
        if info.is_orderable:
            values.extend([f"{info.name}_asc", f"{info.name}_desc"])
    if values:
        ctx.type_map[name] = enum_type(name, values)
        logger.debug("Added ordering enum %s", name)
