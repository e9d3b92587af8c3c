"""Structured temporal types and the rewrite of temporal scalar references."""

import logging

from graphql.language import (
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    TypeNode,
)

from ..schema.config import TemporalConfig
from .builders import (
    field_definition,
    get_named_type,
    input_object_type,
    input_value,
    named_type,
    object_type,
    rename_leaf,
)

logger = logging.getLogger(__name__)

_TIME_PARTS = ("hour", "minute", "second", "millisecond", "microsecond", "nanosecond")
_DATE_PARTS = ("year", "month", "day")

# scalar name -> (config kind, structured type name, integer sub-fields, has timezone)
TEMPORAL_SCALARS: dict[str, tuple[str, str, tuple[str, ...], bool]] = {
    "Time": ("time", "_Neo4jTime", _TIME_PARTS, True),
    "Date": ("date", "_Neo4jDate", _DATE_PARTS, False),
    "DateTime": ("datetime", "_Neo4jDateTime", _DATE_PARTS + _TIME_PARTS, True),
    "LocalTime": ("localtime", "_Neo4jLocalTime", _TIME_PARTS, False),
    "LocalDateTime": (
        "localdatetime",
        "_Neo4jLocalDateTime",
        _DATE_PARTS + _TIME_PARTS,
        False,
    ),
}

TEMPORAL_TYPE_NAMES = frozenset(entry[1] for entry in TEMPORAL_SCALARS.values())
TEMPORAL_INPUT_NAMES = frozenset(f"{name}Input" for name in TEMPORAL_TYPE_NAMES)


def is_temporal_type(name: str) -> bool:
    """Check for a structured temporal output type name."""
    return name in TEMPORAL_TYPE_NAMES


def temporal_input_name(name: str) -> str:
    """Map a structured temporal output type to its input twin."""
    if is_temporal_type(name):
        return f"{name}Input"
    return name


def to_input_type(type_: TypeNode) -> TypeNode:
    """Point a type's leaf at the temporal input twin, keeping its wrappers."""
    leaf = get_named_type(type_).name.value
    if is_temporal_type(leaf):
        return rename_leaf(type_, temporal_input_name(leaf))
    return type_


def _sub_fields(parts: tuple[str, ...], has_timezone: bool) -> list[tuple[str, str]]:
    fields = [(part, "Int") for part in parts]
    if has_timezone:
        fields.append(("timezone", "String"))
    fields.append(("formatted", "String"))
    return fields


def add_temporal_types(type_map: dict, temporal: TemporalConfig) -> dict:
    """Define the structured temporal types and rewrite every reference.

    For each enabled kind an output type and a structurally identical
    input twin are added unless a type of that name already exists.
    """
    for kind, type_name, parts, has_timezone in TEMPORAL_SCALARS.values():
        if not temporal.is_enabled(kind):
            continue
        sub_fields = _sub_fields(parts, has_timezone)
        if type_name not in type_map:
            type_map[type_name] = object_type(
                type_name,
                [field_definition(name, named_type(t)) for name, t in sub_fields],
            )
            logger.debug("Added temporal type %s", type_name)
        input_name = temporal_input_name(type_name)
        if input_name not in type_map:
            type_map[input_name] = input_object_type(
                input_name,
                [input_value(name, named_type(t)) for name, t in sub_fields],
            )

    return transform_temporal_fields(type_map, temporal)


def transform_temporal_type(
    type_: TypeNode, temporal: TemporalConfig, is_input: bool = False
) -> TypeNode:
    """Rewrite a temporal scalar leaf through any list/non-null layers."""
    leaf = get_named_type(type_).name.value
    entry = TEMPORAL_SCALARS.get(leaf)
    if entry is None or not temporal.is_enabled(entry[0]):
        return type_
    target = temporal_input_name(entry[1]) if is_input else entry[1]
    return rename_leaf(type_, target)


def transform_temporal_fields(type_map: dict, temporal: TemporalConfig) -> dict:
    """Rewrite temporal scalar references in fields, arguments and inputs."""
    for name, node in type_map.items():
        if name in TEMPORAL_TYPE_NAMES or name in TEMPORAL_INPUT_NAMES:
            continue
        if isinstance(node, (ObjectTypeDefinitionNode, InterfaceTypeDefinitionNode)):
            for f in node.fields or []:
                f.type = transform_temporal_type(f.type, temporal)
                for arg in f.arguments or []:
                    arg.type = transform_temporal_type(arg.type, temporal, is_input=True)
        elif isinstance(node, InputObjectTypeDefinitionNode):
            for f in node.fields or []:
                f.type = transform_temporal_type(f.type, temporal, is_input=True)

    return type_map
