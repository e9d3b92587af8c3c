"""Loading of SDL schemas and augmentation configs."""

import logging
from pathlib import Path

import yaml
from graphql import GraphQLSyntaxError, parse, print_ast
from graphql.language import (
    DefinitionNode,
    DirectiveDefinitionNode,
    DocumentNode,
    TypeDefinitionNode,
    TypeExtensionNode,
)
from pydantic import ValidationError

from .config import AugmentationConfig
from .errors import SchemaLoadError, SchemaValidationError

logger = logging.getLogger(__name__)

TypeMap = dict[str, DefinitionNode]

# Attributes a type extension may contribute to its base definition.
_EXTENSION_LISTS = ("interfaces", "directives", "fields", "values", "types")


def load_yaml(path: str | Path) -> dict:
    """Load a YAML file and return the raw data.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed YAML data as a dictionary.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise SchemaLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise SchemaLoadError(f"Not a file: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}", str(path)) from e
    except OSError as e:
        raise SchemaLoadError(f"Cannot read file: {e}", str(path)) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Expected YAML mapping at root, got {type(data).__name__}", str(path)
        )

    return data


def load_config(path: str | Path) -> AugmentationConfig:
    """Load and validate an augmentation config file.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If the data fails validation.
    """
    return parse_config(load_yaml(path))


def parse_config(data: dict | None) -> AugmentationConfig:
    """Validate raw config data into an AugmentationConfig.

    Args:
        data: The raw config mapping, or None for defaults.

    Returns:
        The validated config.

    Raises:
        SchemaValidationError: If the data fails validation.
    """
    try:
        return AugmentationConfig.model_validate(data or {})
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise SchemaValidationError(
            f"Config validation failed with {len(errors)} error(s)", errors
        ) from e


def load_type_map(path: str | Path) -> TypeMap:
    """Read an SDL file and extract its type map.

    Raises:
        SchemaLoadError: If the file cannot be read or the SDL is invalid.
    """
    path = Path(path)

    if not path.is_file():
        raise SchemaLoadError(f"File not found: {path}", str(path))

    try:
        sdl = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaLoadError(f"Cannot read file: {e}", str(path)) from e

    try:
        return parse_type_map(sdl)
    except SchemaLoadError as e:
        raise SchemaLoadError(str(e), str(path)) from e


def parse_type_map(sdl: str) -> TypeMap:
    """Parse SDL text into a name-keyed type map.

    Raises:
        SchemaLoadError: If the SDL cannot be parsed.
    """
    try:
        document = parse(sdl, no_location=True)
    except GraphQLSyntaxError as e:
        raise SchemaLoadError(f"Invalid SDL: {e.message}") from e

    return extract_type_map(document)


def extract_type_map(document: DocumentNode) -> TypeMap:
    """Key the type and directive definitions of a document by name.

    Type extensions are merged into their base definition. Schema
    definitions are dropped; root operation types are always named
    Query and Mutation.
    """
    type_map: TypeMap = {}
    extensions: list[TypeExtensionNode] = []

    for definition in document.definitions:
        if isinstance(definition, TypeExtensionNode):
            extensions.append(definition)
        elif isinstance(definition, (TypeDefinitionNode, DirectiveDefinitionNode)):
            type_map[definition.name.value] = definition
        else:
            logger.debug("Dropping %s definition", definition.kind)

    for extension in extensions:
        name = extension.name.value
        base = type_map.get(name)
        if base is None:
            logger.debug("Extension of undefined type %s dropped", name)
            continue
        for attr in _EXTENSION_LISTS:
            extra = getattr(extension, attr, None)
            if extra and attr in base.keys:
                setattr(base, attr, (*(getattr(base, attr) or ()), *extra))

    return type_map


def print_type_map(type_map: TypeMap) -> str:
    """Print a type map back to SDL text."""
    return print_ast(DocumentNode(definitions=tuple(type_map.values())))
