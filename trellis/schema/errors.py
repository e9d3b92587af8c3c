"""Schema-related exceptions."""


class SchemaLoadError(Exception):
    """Raised when an SDL or config file cannot be loaded."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class SchemaValidationError(Exception):
    """Raised when a configuration fails validation."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)


class AugmentationError(Exception):
    """Base exception for structural errors found while augmenting."""

    pass


class RelationshipStructureError(AugmentationError):
    """Raised when a relationship type has only one of 'from' / 'to'."""

    def __init__(self, type_name: str, missing: str, present: str | None = None):
        self.type_name = type_name
        self.missing = missing
        self.present = present
        if present:
            message = (
                f"Relationship type {type_name} has a '{present}' field "
                f"but no corresponding '{missing}' field"
            )
        else:
            message = f"Relationship type {type_name} does not declare a '{missing}' type"
        super().__init__(message)


class RelationshipDirectionError(AugmentationError):
    """Raised when a relationship field's owner is neither endpoint."""

    def __init__(
        self,
        type_name: str,
        field_name: str,
        relation_type: str,
        from_type: str,
        to_type: str,
    ):
        self.type_name = type_name
        self.field_name = field_name
        self.relation_type = relation_type
        self.from_type = from_type
        self.to_type = to_type
        super().__init__(
            f"The '{field_name}' field on the '{type_name}' type uses the "
            f"'{relation_type}' relationship, but '{relation_type}' comes from "
            f"'{from_type}' and goes to '{to_type}'"
        )


class TranslationUnavailableError(Exception):
    """Raised when a default resolver runs without a query translator."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"No query translator configured for generated operation '{operation}'"
        )


class DeclarationConflictError(AugmentationError):
    """Raised when a schema type takes a name the engine must declare."""

    def __init__(self, name: str, expected: str, found: str):
        self.name = name
        self.expected = expected
        self.found = found
        super().__init__(
            f"'{name}' is declared as {found}, but the enabled directives "
            f"need it to be {expected}"
        )
