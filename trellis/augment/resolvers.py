"""Default resolvers for generated operations and interface type resolution."""

import logging
from typing import Any, Callable

from ..schema.errors import TranslationUnavailableError
from .builders import is_interface_type
from .context import MUTATION, QUERY, ROOT_TYPES

logger = logging.getLogger(__name__)

# Reserved key the back end sets on results of interface-typed operations.
FRAGMENT_TYPE_KEY = "FRAGMENT_TYPE"

# (obj, info, debug=..., **args) -> result
Translator = Callable[..., Any]


def make_default_resolver(
    operation: str, translate: Translator | None, debug: bool = False
) -> Callable[..., Any]:
    """Build a resolver delegating to the query translator."""

    def resolve(obj, info, **args):
        if translate is None:
            raise TranslationUnavailableError(operation)
        return translate(obj, info, debug=debug, **args)

    resolve.__name__ = f"resolve_{operation}"
    return resolve


def resolve_fragment_type(obj, *_args) -> str | None:
    """Pick the concrete type of an interface value from its runtime tag."""
    if isinstance(obj, dict):
        return obj.get(FRAGMENT_TYPE_KEY)
    return getattr(obj, FRAGMENT_TYPE_KEY, None)


def augment_resolvers(
    type_map: dict,
    resolvers: dict | None = None,
    translate: Translator | None = None,
    debug: bool = False,
) -> dict:
    """Fill in resolvers for root operations and interface types.

    User resolvers are kept; only missing entries are added. The mapping
    passed in is updated and returned.
    """
    resolvers = resolvers if resolvers is not None else {}

    for operation in (QUERY, MUTATION):
        root_name = ROOT_TYPES[operation]
        root = type_map.get(root_name)
        if root is None:
            continue
        operation_resolvers = dict(resolvers.get(root_name) or {})
        for f in root.fields or []:
            name = f.name.value
            if name not in operation_resolvers:
                operation_resolvers[name] = make_default_resolver(name, translate, debug)
        if operation_resolvers:
            resolvers[root_name] = operation_resolvers

    for name, node in type_map.items():
        if is_interface_type(node):
            resolvers.setdefault(name, {}).setdefault("__resolveType", resolve_fragment_type)

    logger.debug("Resolvers bound for %d types", len(resolvers))
    return resolvers
