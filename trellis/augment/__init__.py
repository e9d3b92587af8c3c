"""Schema augmentation: generated queries, mutations, inputs and resolvers."""

from .context import AugmentationContext, AugmentationPolicy, PolicyHook
from .models import AugmentationResult, FieldInfo, FieldKind, Relationship
from .auth import make_scope_policy_hook
from .relations import relation_name_from_type
from .resolvers import FRAGMENT_TYPE_KEY, augment_resolvers
from .pipeline import (
    STAGES,
    augment_schema,
    augment_schema_file,
    augment_sdl,
    augment_type_map,
)

__all__ = [
    "AugmentationContext",
    "AugmentationPolicy",
    "PolicyHook",
    "AugmentationResult",
    "FieldInfo",
    "FieldKind",
    "Relationship",
    "make_scope_policy_hook",
    "relation_name_from_type",
    "FRAGMENT_TYPE_KEY",
    "augment_resolvers",
    "STAGES",
    "augment_schema",
    "augment_schema_file",
    "augment_sdl",
    "augment_type_map",
]
