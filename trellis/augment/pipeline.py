"""Main schema augmentation orchestrator."""

import copy
import logging
from pathlib import Path
from typing import Callable

from ..schema.config import AugmentationConfig
from ..schema.loader import load_type_map, parse_type_map
from .auth import make_scope_policy_hook
from .builders import is_node_type, object_type
from .classify import classify_fields
from .context import (
    MUTATION,
    QUERY,
    ROOT_TYPES,
    AugmentationContext,
    PolicyHook,
    resolve_policy,
)
from .directives import add_directive_declarations
from .filters import possibly_add_filter_input, possibly_add_ordering_enum
from .models import AugmentationResult
from .nodes import (
    add_relation_field_arguments,
    augment_node_type,
    augment_query_arguments,
    possibly_add_node_input,
    possibly_add_query,
    possibly_add_type_mutations,
)
from .relations import add_relation_type_directives, handle_relation_fields
from .resolvers import Translator, augment_resolvers
from .temporal import TEMPORAL_INPUT_NAMES, TEMPORAL_TYPE_NAMES, add_temporal_types

logger = logging.getLogger(__name__)

Stage = Callable[[AugmentationContext], AugmentationContext]


def normalize_relationships(ctx: AugmentationContext) -> AugmentationContext:
    add_relation_type_directives(ctx.type_map)
    return ctx


def initialize_operation_types(ctx: AugmentationContext) -> AugmentationContext:
    """Add empty Query / Mutation types when some node type will need them."""
    for operation in (QUERY, MUTATION):
        root_name = ROOT_TYPES[operation]
        if root_name in ctx.type_map:
            continue
        if any(
            is_node_type(node) and ctx.policy.should_augment_type(operation, name)
            for name, node in ctx.type_map.items()
        ):
            ctx.type_map[root_name] = object_type(root_name)
            logger.debug("Added root type %s", root_name)
    return ctx


def substitute_temporal_types(ctx: AugmentationContext) -> AugmentationContext:
    add_temporal_types(ctx.type_map, ctx.policy.temporal)
    return ctx


def augment_types(ctx: AugmentationContext) -> AugmentationContext:
    """Run the per-type generators over every type declared so far."""
    policy = ctx.policy
    for type_name, node in list(ctx.type_map.items()):
        if type_name in TEMPORAL_TYPE_NAMES or type_name in TEMPORAL_INPUT_NAMES:
            continue
        if not is_node_type(node):
            continue

        query_enabled = policy.should_augment_type(QUERY, type_name)
        mutation_enabled = policy.should_augment_type(MUTATION, type_name)

        augment_node_type(ctx, node)
        infos = classify_fields(node, ctx.type_map)
        add_relation_field_arguments(ctx, infos)

        if query_enabled:
            possibly_add_query(ctx, node, infos)
            possibly_add_ordering_enum(ctx, node, infos)
        if mutation_enabled:
            possibly_add_node_input(ctx, node)
        if query_enabled:
            possibly_add_filter_input(ctx, node, infos)
        if mutation_enabled:
            possibly_add_type_mutations(ctx, node, infos)
        handle_relation_fields(ctx, node, infos)

    return ctx


def augment_query_field_arguments(ctx: AugmentationContext) -> AugmentationContext:
    augment_query_arguments(ctx)
    return ctx


def declare_directives(ctx: AugmentationContext) -> AugmentationContext:
    add_directive_declarations(ctx.type_map, ctx.policy.auth)
    return ctx


# Later stages depend on what earlier ones inserted.
STAGES: tuple[Stage, ...] = (
    normalize_relationships,
    initialize_operation_types,
    substitute_temporal_types,
    augment_types,
    augment_query_field_arguments,
    declare_directives,
)


def augment_type_map(
    type_map: dict,
    config: AugmentationConfig | None = None,
    policy_hook: PolicyHook | None = None,
) -> dict:
    """Augment a type map with the generated API.

    The input map is not modified; a deep copy is augmented and returned.

    Args:
        type_map: Name-keyed type and directive definitions.
        config: Which operations and temporal types to generate.
        policy_hook: Supplies authorization directives for generated fields.
            Defaults to @hasScope injection driven by ``config.auth``.

    Returns:
        The augmented type map.

    Raises:
        RelationshipStructureError: If a relationship type lacks an endpoint.
        RelationshipDirectionError: If a relationship field's owner is not
            one of the relationship's endpoints.
    """
    config = config or AugmentationConfig()
    type_map = copy.deepcopy(type_map)

    ctx = AugmentationContext(
        type_map=type_map,
        policy=resolve_policy(type_map, config),
        policy_hook=policy_hook or make_scope_policy_hook(config.auth),
    )
    for stage in STAGES:
        logger.debug("Running stage %s", stage.__name__)
        ctx = stage(ctx)

    return ctx.type_map


def _added_root_fields(before: dict, after: dict, root_name: str) -> list[str]:
    def names(type_map: dict) -> list[str]:
        root = type_map.get(root_name)
        return [f.name.value for f in root.fields or []] if root is not None else []

    existing = set(names(before))
    return [name for name in names(after) if name not in existing]


def augment_schema(
    type_map: dict,
    resolvers: dict | None = None,
    config: AugmentationConfig | None = None,
    translate: Translator | None = None,
    policy_hook: PolicyHook | None = None,
) -> AugmentationResult:
    """Augment a type map and bind resolvers for everything generated.

    Args:
        type_map: Name-keyed type and directive definitions.
        resolvers: User resolvers, by type name then field name. Kept as is.
        config: Which operations and temporal types to generate.
        translate: The query translator default resolvers delegate to.
        policy_hook: Supplies authorization directives for generated fields.

    Returns:
        AugmentationResult with the augmented map, resolvers and a summary.
    """
    config = config or AugmentationConfig()
    augmented = augment_type_map(type_map, config, policy_hook)
    bound = augment_resolvers(
        augmented, resolvers if resolvers is not None else {}, translate, config.debug
    )

    result = AugmentationResult(
        type_map=augmented,
        resolvers=bound,
        added_types=[name for name in augmented if name not in type_map],
        queries=_added_root_fields(type_map, augmented, ROOT_TYPES[QUERY]),
        mutations=_added_root_fields(type_map, augmented, ROOT_TYPES[MUTATION]),
    )
    logger.debug(
        "Augmentation added %d types, %d queries, %d mutations",
        len(result.added_types),
        len(result.queries),
        len(result.mutations),
    )
    return result


def augment_sdl(sdl: str, **kwargs) -> AugmentationResult:
    """Parse SDL text and augment it. See augment_schema for arguments."""
    return augment_schema(parse_type_map(sdl), **kwargs)


def augment_schema_file(path: str | Path, **kwargs) -> AugmentationResult:
    """Load an SDL file and augment it.

    Convenience wrapper mirroring augment_sdl for files on disk.
    """
    return augment_schema(load_type_map(path), **kwargs)
