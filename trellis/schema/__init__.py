"""Schema layer for loading SDL schemas and augmentation configs."""

from .errors import (
    AugmentationError,
    RelationshipDirectionError,
    RelationshipStructureError,
    SchemaLoadError,
    SchemaValidationError,
    TranslationUnavailableError,
)
from .config import AugmentationConfig, AuthConfig, OperationFilter, TemporalConfig
from .loader import (
    TypeMap,
    extract_type_map,
    load_config,
    load_type_map,
    load_yaml,
    parse_config,
    parse_type_map,
    print_type_map,
)

__all__ = [
    "AugmentationError",
    "RelationshipDirectionError",
    "RelationshipStructureError",
    "SchemaLoadError",
    "SchemaValidationError",
    "TranslationUnavailableError",
    "AugmentationConfig",
    "AuthConfig",
    "OperationFilter",
    "TemporalConfig",
    "TypeMap",
    "extract_type_map",
    "load_config",
    "load_type_map",
    "load_yaml",
    "parse_config",
    "parse_type_map",
    "print_type_map",
]
