"""Declarations for the directives the engine itself puts into a schema."""

import logging

from ..schema.config import AuthConfig
from ..schema.errors import DeclarationConflictError
from .builders import (
    CYPHER_DIRECTIVE,
    IGNORE_DIRECTIVE,
    MUTATION_META_DIRECTIVE,
    RELATION_DIRECTIVE,
    directive_definition,
    enum_type,
    input_value,
    list_type,
    named_type,
)

logger = logging.getLogger(__name__)

FIELD_AND_OBJECT = ("FIELD_DEFINITION", "OBJECT")
OBJECT_AND_FIELD = ("OBJECT", "FIELD_DEFINITION")


def _string_args(*names: str) -> list:
    return [input_value(name, named_type("String")) for name in names]


def _core_declarations() -> dict:
    return {
        "_RelationDirections": enum_type("_RelationDirections", ["IN", "OUT"]),
        RELATION_DIRECTIVE: directive_definition(
            RELATION_DIRECTIVE,
            FIELD_AND_OBJECT,
            [
                input_value("name", named_type("String")),
                input_value("direction", named_type("_RelationDirections")),
                *_string_args("from", "to"),
            ],
        ),
        MUTATION_META_DIRECTIVE: directive_definition(
            MUTATION_META_DIRECTIVE,
            ("FIELD_DEFINITION",),
            _string_args("relationship", "from", "to"),
        ),
        CYPHER_DIRECTIVE: directive_definition(
            CYPHER_DIRECTIVE, ("FIELD_DEFINITION",), _string_args("statement")
        ),
        IGNORE_DIRECTIVE: directive_definition(IGNORE_DIRECTIVE, FIELD_AND_OBJECT),
    }


def _auth_declarations(auth: AuthConfig) -> dict:
    enabled = auth.enabled_directives()
    declarations = {}
    if "isAuthenticated" in enabled:
        declarations["isAuthenticated"] = directive_definition(
            "isAuthenticated", OBJECT_AND_FIELD
        )
    if "hasRole" in enabled:
        declarations["Role"] = enum_type("Role", ["reader", "user", "admin"])
        declarations["hasRole"] = directive_definition(
            "hasRole",
            OBJECT_AND_FIELD,
            [input_value("roles", list_type(named_type("Role")))],
        )
    if "hasScope" in enabled:
        declarations["hasScope"] = directive_definition(
            "hasScope",
            OBJECT_AND_FIELD,
            [input_value("scopes", list_type(named_type("String")))],
        )
    return declarations


def add_directive_declarations(type_map: dict, auth: AuthConfig) -> dict:
    """Declare every directive the engine emits, unless already declared.

    Raises:
        DeclarationConflictError: If a name is already taken by a definition
            of another kind, such as an object type named Role.
    """
    declarations = {**_core_declarations(), **_auth_declarations(auth)}
    for name, definition in declarations.items():
        existing = type_map.get(name)
        if existing is not None and existing.kind != definition.kind:
            raise DeclarationConflictError(name, definition.kind, existing.kind)
        if existing is None:
            type_map[name] = definition
            logger.debug("Declared %s", name)
    return type_map
