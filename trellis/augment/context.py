"""Resolved policy and the context threaded through the pipeline stages."""

from dataclasses import dataclass, field
from typing import Callable

from graphql.language import DirectiveNode, FieldDefinitionNode, ObjectTypeDefinitionNode

from ..schema.config import AugmentationConfig, AuthConfig, TemporalConfig
from .builders import IGNORE_DIRECTIVE, get_directive

QUERY = "query"
MUTATION = "mutation"

ROOT_TYPES = {QUERY: "Query", MUTATION: "Mutation"}

# (entity kind, operation, type name, related type name) -> directives to attach
PolicyHook = Callable[[str, str, str, str | None], list[DirectiveNode]]


@dataclass(frozen=True)
class AugmentationPolicy:
    """Which types get which generated operations.

    Computed once from the config and the @neo4j_ignore markers on types,
    read-only afterwards.
    """

    query_enabled: bool = True
    mutation_enabled: bool = True
    query_excluded: frozenset[str] = frozenset()
    mutation_excluded: frozenset[str] = frozenset()
    temporal: TemporalConfig = field(default_factory=TemporalConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    debug: bool = False

    def should_augment_type(self, operation: str, type_name: str | None) -> bool:
        if not type_name:
            return False
        if operation == QUERY:
            return self.query_enabled and type_name not in self.query_excluded
        return self.mutation_enabled and type_name not in self.mutation_excluded

    def should_augment_relation(
        self, operation: str, from_type: str, to_type: str
    ) -> bool:
        return self.should_augment_type(
            operation, from_type
        ) and self.should_augment_type(operation, to_type)


def resolve_policy(type_map: dict, config: AugmentationConfig) -> AugmentationPolicy:
    """Combine config exclusions with types marked @neo4j_ignore."""
    ignored = {
        name
        for name, node in type_map.items()
        if get_directive(node, IGNORE_DIRECTIVE) is not None
    }
    return AugmentationPolicy(
        query_enabled=config.operation_enabled(QUERY),
        mutation_enabled=config.operation_enabled(MUTATION),
        query_excluded=frozenset(config.excluded_types(QUERY)) | ignored,
        mutation_excluded=frozenset(config.excluded_types(MUTATION)) | ignored,
        temporal=config.temporal,
        auth=config.auth,
        debug=config.debug,
    )


def no_policy_directives(
    entity_kind: str,
    operation: str,
    type_name: str,
    related_type_name: str | None = None,
) -> list[DirectiveNode]:
    return []


@dataclass
class AugmentationContext:
    """The type map plus everything a stage needs to read while changing it."""

    type_map: dict
    policy: AugmentationPolicy
    policy_hook: PolicyHook = no_policy_directives

    def root_type(self, operation: str) -> ObjectTypeDefinitionNode | None:
        return self.type_map.get(ROOT_TYPES[operation])

    def operation_fields(self, operation: str) -> dict[str, FieldDefinitionNode]:
        """Map root field names to their definitions."""
        root = self.root_type(operation)
        if root is None:
            return {}
        return {f.name.value: f for f in root.fields or []}

    def policy_directives(
        self,
        entity_kind: str,
        operation: str,
        type_name: str,
        related_type_name: str | None = None,
    ) -> list[DirectiveNode]:
        return list(
            self.policy_hook(entity_kind, operation, type_name, related_type_name)
            or []
        )
