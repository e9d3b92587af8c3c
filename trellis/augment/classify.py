"""Classification of fields by what their value type is."""

from graphql.language import FieldDefinitionNode, ScalarTypeDefinitionNode

from .builders import (
    RELATION_DIRECTIVE,
    get_directive,
    is_basic_scalar,
    is_computed,
    is_enum_type,
    is_ignored,
    is_list_type,
    is_node_type,
    is_non_null_type,
    is_relation_type,
    type_name_of,
)
from .models import FieldInfo, FieldKind
from .temporal import is_temporal_type


def classify_field(field: FieldDefinitionNode, type_map: dict) -> FieldInfo:
    """Classify one field against the current type map."""
    type_name = type_name_of(field)
    value_type = type_map.get(type_name)

    if is_basic_scalar(type_name):
        kind = FieldKind.SCALAR
    elif is_temporal_type(type_name):
        kind = FieldKind.TEMPORAL
    elif is_enum_type(value_type):
        kind = FieldKind.ENUM
    elif isinstance(value_type, ScalarTypeDefinitionNode):
        kind = FieldKind.CUSTOM_SCALAR
    elif is_node_type(value_type):
        if get_directive(field, RELATION_DIRECTIVE) is not None:
            kind = FieldKind.NODE_RELATION
        else:
            kind = FieldKind.NODE
    elif is_relation_type(value_type) and get_directive(
        value_type, RELATION_DIRECTIVE
    ):
        kind = FieldKind.RELATION_TYPE
    else:
        kind = FieldKind.OTHER

    return FieldInfo(
        field=field,
        kind=kind,
        type_name=type_name,
        is_list=is_list_type(field.type),
        is_non_null=is_non_null_type(field.type),
        ignored=is_ignored(field),
        computed=is_computed(field),
    )


def classify_fields(node, type_map: dict) -> list[FieldInfo]:
    """Classify every field of a type, in declaration order."""
    return [classify_field(f, type_map) for f in getattr(node, "fields", None) or []]
