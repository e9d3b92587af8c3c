"""Relationship normalization, relationship payload types and mutations.

A relationship between two node types can be declared two ways:

- as a relationship type, an object type with 'from' and 'to' fields,
  used as the value type of a node type's field::

      type ACTED_IN @relation(name: "ACTED_IN") {
        from: Person
        to: Movie
        roles: [String]
      }

- as a field directive on a node-valued field::

      type Person {
        movies: [Movie] @relation(name: "ACTED_IN", direction: OUT)
      }

Both resolve to the same Relationship (name, from, to), and both produce
Add/Remove mutations carrying @MutationMeta for the query back end.
"""

import copy
import logging

from graphql.language import FieldDefinitionNode, ObjectTypeDefinitionNode

from ..schema.errors import RelationshipDirectionError, RelationshipStructureError
from .builders import (
    RELATION_DIRECTIVE,
    append_to,
    capitalize,
    field_definition,
    get_directive,
    get_directive_argument,
    get_field,
    input_object_type,
    input_value,
    is_object_type,
    is_relation_type,
    list_type,
    mutation_meta_directive,
    named_type,
    non_null,
    object_type,
    relation_directive,
    strip_all_non_null,
    type_name_of,
)
from .classify import classify_fields
from .context import MUTATION, QUERY, AugmentationContext
from .models import FieldInfo, FieldKind, Relationship
from .nodes import add_pagination_arguments, has_primary_key_input
from .temporal import to_input_type

logger = logging.getLogger(__name__)

RELATION_MUTATIONS = ("Add", "Remove")


def relation_name_from_type(name: str) -> str:
    """Derive a default relationship name from a type or field name.

    Every character is upper-cased and an underscore is inserted before
    each uppercase letter except the first character: ``ActedIn`` becomes
    ``ACTED_IN``, ``A`` stays ``A`` and ``ABC`` becomes ``A_B_C``.
    """
    chars = []
    for index, char in enumerate(name):
        if index > 0 and char.isupper():
            chars.append("_")
        chars.append(char.upper())
    return "".join(chars)


def _is_direction_carrier(type_map: dict, type_name: str) -> bool:
    return is_relation_type(type_map.get(type_name))


# -------------------------------------------------------------------------
# Normalization
# -------------------------------------------------------------------------


def add_relation_type_directives(type_map: dict) -> dict:
    """Force a complete @relation(name, from, to) onto every relationship type.

    Raises:
        RelationshipStructureError: If a type has only one of 'from' / 'to'.
    """
    for type_name, node in type_map.items():
        if not is_object_type(node):
            continue
        from_field = get_field(node, "from")
        to_field = get_field(node, "to")
        if to_field is not None and from_field is None:
            raise RelationshipStructureError(type_name, missing="from", present="to")
        if from_field is not None and to_field is None:
            raise RelationshipStructureError(type_name, missing="to", present="from")
        if from_field is None:
            continue

        from_type = type_name_of(from_field)
        to_type = type_name_of(to_field)
        if _is_direction_carrier(type_map, from_type) or _is_direction_carrier(
            type_map, to_type
        ):
            continue

        existing = get_directive(node, RELATION_DIRECTIVE)
        relation_name = get_directive_argument(
            existing, "name"
        ) or relation_name_from_type(type_name)
        normalized = relation_directive(relation_name, from_type, to_type)

        directives = list(node.directives or [])
        if existing is None:
            directives.append(normalized)
        else:
            directives[directives.index(existing)] = normalized
        node.directives = tuple(directives)
        logger.debug(
            "Relationship type %s normalized as %s (%s -> %s)",
            type_name,
            relation_name,
            from_type,
            to_type,
        )

    return type_map


# -------------------------------------------------------------------------
# Resolution
# -------------------------------------------------------------------------


def relationship_from_type(relation_node: ObjectTypeDefinitionNode) -> Relationship:
    """Read a relationship off a relation-marked type's directive.

    Raises:
        RelationshipStructureError: If the directive lacks an endpoint.
    """
    type_name = relation_node.name.value
    d = get_directive(relation_node, RELATION_DIRECTIVE)
    from_type = get_directive_argument(d, "from")
    to_type = get_directive_argument(d, "to")
    if not from_type:
        raise RelationshipStructureError(type_name, missing="from")
    if not to_type:
        raise RelationshipStructureError(type_name, missing="to")
    name = get_directive_argument(d, "name") or relation_name_from_type(type_name)
    return Relationship(name, from_type, to_type, relation_type=type_name)


def relationship_from_field(owner: str, info: FieldInfo) -> Relationship:
    """Infer a relationship from a node-valued field's @relation directive.

    The owner is 'from' unless the direction is IN, which swaps the pair.
    """
    d = get_directive(info.field, RELATION_DIRECTIVE)
    name = get_directive_argument(d, "name") or relation_name_from_type(info.name)
    direction = (get_directive_argument(d, "direction") or "OUT").upper()
    if direction == "IN":
        return Relationship(name, info.type_name, owner)
    return Relationship(name, owner, info.type_name)


def validate_directed_fields(
    owner: str, info: FieldInfo, relationship: Relationship
) -> None:
    """A relationship-type field must have its owner on one side.

    Raises:
        RelationshipDirectionError: If the owner is neither endpoint.
    """
    if not relationship.is_reflexive and not relationship.involves(owner):
        raise RelationshipDirectionError(
            type_name=owner,
            field_name=info.name,
            relation_type=info.type_name,
            from_type=relationship.from_type,
            to_type=relationship.to_type,
        )


def resolve_relationship(
    owner: str, info: FieldInfo, type_map: dict
) -> Relationship | None:
    """Resolve the relationship a field takes part in, if any."""
    if info.ignored:
        return None
    if info.kind == FieldKind.NODE_RELATION:
        return relationship_from_field(owner, info)
    if info.kind == FieldKind.RELATION_TYPE:
        relationship = relationship_from_type(type_map[info.type_name])
        validate_directed_fields(owner, info, relationship)
        return relationship
    return None


# -------------------------------------------------------------------------
# Relationship property inputs and payloads
# -------------------------------------------------------------------------


def relation_property_infos(relation_node: ObjectTypeDefinitionNode, type_map: dict):
    """Stored property fields of a relationship type, 'from' and 'to' excluded."""
    return [
        info
        for info in classify_fields(relation_node, type_map)
        if not info.is_system and info.is_stored_value
    ]


def relation_input_name(relation_type: str) -> str:
    return f"_{relation_type}Input"


def possibly_add_relation_input(
    ctx: AugmentationContext, relation_type: str, properties: list[FieldInfo]
) -> None:
    """Add _<RelType>Input, the type of the data argument of Add mutations."""
    name = relation_input_name(relation_type)
    if name in ctx.type_map:
        return
    ctx.type_map[name] = input_object_type(
        name,
        [input_value(info.name, to_input_type(info.field.type)) for info in properties],
    )
    logger.debug("Added relationship input %s", name)


def possibly_add_relation_type_payload(
    ctx: AugmentationContext,
    owner: str,
    info: FieldInfo,
    relationship: Relationship,
) -> None:
    """Add _<Type><Field>, exposing properties and the related node.

    A reflexive relationship also gets _<Type><Field>Directions, whose
    'from' and 'to' fields select each direction, and the original
    field's arguments move onto them.
    """
    relation_node = ctx.type_map[info.type_name]
    payload_name = f"_{owner}{capitalize(info.name)}"
    if payload_name in ctx.type_map:
        return

    fields = [
        copy.deepcopy(f)
        for f in relation_node.fields or []
        if f.name.value not in ("from", "to")
    ]
    if relationship.is_reflexive or owner == relationship.to_type:
        related = relationship.from_type
    else:
        related = relationship.to_type
    fields.append(field_definition(related, named_type(related)))
    directives = copy.deepcopy(list(relation_node.directives or []))

    if relationship.is_reflexive:
        directions_name = f"{payload_name}Directions"
        if directions_name not in ctx.type_map:
            ctx.type_map[directions_name] = object_type(
                directions_name,
                [
                    _direction_field(ctx, "from", info, payload_name, owner),
                    _direction_field(ctx, "to", info, payload_name, owner),
                ],
                directives=copy.deepcopy(directives),
            )
        info.field.arguments = ()

    ctx.type_map[payload_name] = object_type(payload_name, fields, directives)
    logger.debug("Added relationship payload %s", payload_name)


def _direction_field(
    ctx: AugmentationContext,
    direction: str,
    info: FieldInfo,
    payload_name: str,
    owner: str,
) -> FieldDefinitionNode:
    type_ = named_type(payload_name)
    if info.is_list:
        type_ = list_type(type_)
    f = field_definition(
        direction, type_, arguments=copy.deepcopy(list(info.field.arguments or []))
    )
    if info.is_list and ctx.policy.should_augment_type(QUERY, owner):
        add_pagination_arguments(f, owner)
    return f


def replace_relation_type_value(
    owner: str, info: FieldInfo, relationship: Relationship
) -> None:
    """Point a relationship-type field at its generated payload type."""
    payload_name = f"_{owner}{capitalize(info.name)}"
    if relationship.is_reflexive:
        info.field.type = named_type(f"{payload_name}Directions")
    elif info.is_list:
        info.field.type = list_type(named_type(payload_name))
    else:
        info.field.type = named_type(payload_name)


# -------------------------------------------------------------------------
# Relationship mutations
# -------------------------------------------------------------------------


def possibly_add_relation_mutations(
    ctx: AugmentationContext,
    owner: str,
    info: FieldInfo,
    relationship: Relationship,
) -> None:
    """Add Add<Type><Field> and Remove<Type><Field> for a relationship."""
    from_type, to_type = relationship.from_type, relationship.to_type
    if not ctx.policy.should_augment_relation(MUTATION, from_type, to_type):
        return
    if not (has_primary_key_input(ctx, from_type) and has_primary_key_input(ctx, to_type)):
        logger.debug(
            "Relationship %s skipped, %s or %s has no primary key",
            relationship.name,
            from_type,
            to_type,
        )
        return

    properties = []
    if relationship.relation_type is not None:
        relation_node = ctx.type_map.get(relationship.relation_type)
        if relation_node is not None:
            properties = relation_property_infos(relation_node, ctx.type_map)

    related = from_type if owner == to_type else to_type
    existing = ctx.operation_fields(MUTATION)
    for action in RELATION_MUTATIONS:
        mutation_name = f"{action}{owner}{capitalize(info.name)}"
        if mutation_name in existing:
            continue
        with_data = bool(properties) and action == "Add"

        args = [
            input_value("from", non_null(named_type(f"_{from_type}Input"))),
            input_value("to", non_null(named_type(f"_{to_type}Input"))),
        ]
        if with_data:
            possibly_add_relation_input(ctx, relationship.relation_type, properties)
            args.append(
                input_value(
                    "data",
                    non_null(named_type(relation_input_name(relationship.relation_type))),
                )
            )

        payload_name = f"_{mutation_name}Payload"
        directives = [
            mutation_meta_directive(relationship.name, from_type, to_type),
            *ctx.policy_directives("relation", action, owner, related),
        ]
        append_to(
            ctx.root_type(MUTATION),
            "fields",
            field_definition(
                mutation_name,
                named_type(payload_name),
                arguments=args,
                directives=directives,
            ),
        )
        logger.debug("Added relationship mutation %s", mutation_name)

        if payload_name not in ctx.type_map:
            payload_fields = [
                field_definition("from", named_type(from_type)),
                field_definition("to", named_type(to_type)),
            ]
            if with_data:
                payload_fields.extend(
                    field_definition(p.name, strip_all_non_null(p.field.type))
                    for p in properties
                )
            ctx.type_map[payload_name] = object_type(
                payload_name,
                payload_fields,
                [relation_directive(relationship.name, from_type, to_type)],
            )


def handle_relation_fields(
    ctx: AugmentationContext, node: ObjectTypeDefinitionNode, infos: list[FieldInfo]
) -> None:
    """Generate everything a node type's relationship fields need."""
    owner = node.name.value
    for info in infos:
        relationship = resolve_relationship(owner, info, ctx.type_map)
        if relationship is None:
            continue
        possibly_add_relation_mutations(ctx, owner, info, relationship)
        if info.kind == FieldKind.RELATION_TYPE:
            possibly_add_relation_type_payload(ctx, owner, info, relationship)
            replace_relation_type_value(owner, info, relationship)
