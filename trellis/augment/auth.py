"""Authorization directives injected into generated fields."""

from graphql.language import DirectiveNode

from ..schema.config import AuthConfig
from .builders import directive
from .context import PolicyHook

# Relationship mutations are scoped as the node operation they amount to.
_RELATION_SCOPES = {"Add": "Create", "Remove": "Delete"}


def make_scope_policy_hook(auth: AuthConfig) -> PolicyHook:
    """Build the default policy hook, attaching @hasScope when enabled.

    Node operations are scoped as ``"<Type>: <Operation>"``; relationship
    operations require the scope on both endpoint types.
    """

    def scope_policy_hook(
        entity_kind: str,
        operation: str,
        type_name: str,
        related_type_name: str | None = None,
    ) -> list[DirectiveNode]:
        if not auth.has_scope:
            return []
        if entity_kind == "relation":
            operation = _RELATION_SCOPES.get(operation, operation)
            scopes = [f"{type_name}: {operation}"]
            if related_type_name and related_type_name != type_name:
                scopes.append(f"{related_type_name}: {operation}")
            return [directive("hasScope", scopes=scopes)]
        return [directive("hasScope", scopes=[f"{type_name}: {operation}"])]

    return scope_policy_hook
