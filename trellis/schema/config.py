"""Pydantic models for augmentation configuration."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

TEMPORAL_KINDS = ("time", "date", "datetime", "localtime", "localdatetime")
AUTH_DIRECTIVES = ("isAuthenticated", "hasRole", "hasScope")


class OperationFilter(BaseModel):
    """Per-type exclusion for a generated operation kind."""

    model_config = ConfigDict(frozen=True)

    exclude: list[str] = Field(default_factory=list)


class TemporalConfig(BaseModel):
    """Which temporal scalar kinds get structured types."""

    model_config = ConfigDict(frozen=True)

    time: bool = True
    date: bool = True
    datetime: bool = True
    localtime: bool = True
    localdatetime: bool = True

    @model_validator(mode="before")
    @classmethod
    def normalize_temporal(cls, data):
        """Expand a single boolean into the per-kind map."""
        if isinstance(data, bool):
            return {kind: data for kind in TEMPORAL_KINDS}
        return data

    def is_enabled(self, kind: str) -> bool:
        """Check whether a temporal kind is enabled."""
        return bool(getattr(self, kind, False))


class AuthConfig(BaseModel):
    """Which authorization directives are declared and injected."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_authenticated: bool = Field(default=False, alias="isAuthenticated")
    has_role: bool = Field(default=False, alias="hasRole")
    has_scope: bool = Field(default=False, alias="hasScope")

    @model_validator(mode="before")
    @classmethod
    def normalize_auth(cls, data):
        """Expand a single boolean into the per-directive map."""
        if isinstance(data, bool):
            return {name: data for name in AUTH_DIRECTIVES}
        return data

    def enabled_directives(self) -> list[str]:
        """Get the names of the enabled auth directives."""
        flags = {
            "isAuthenticated": self.is_authenticated,
            "hasRole": self.has_role,
            "hasScope": self.has_scope,
        }
        return [name for name in AUTH_DIRECTIVES if flags[name]]


class AugmentationConfig(BaseModel):
    """Root configuration for a schema augmentation run."""

    model_config = ConfigDict(frozen=True)

    query: bool | OperationFilter = True
    mutation: bool | OperationFilter = True
    temporal: TemporalConfig = Field(default_factory=TemporalConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    debug: bool = False

    @model_validator(mode="before")
    @classmethod
    def normalize_config(cls, data):
        """Accept None for sections that were left empty in YAML."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        for key in ("query", "mutation", "temporal", "auth"):
            if key in data and data[key] is None:
                data.pop(key)

        return data

    def excluded_types(self, operation: str) -> list[str]:
        """Get the explicitly excluded type names for 'query' or 'mutation'."""
        value = getattr(self, operation)
        if isinstance(value, OperationFilter):
            return list(value.exclude)
        return []

    def operation_enabled(self, operation: str) -> bool:
        """Check whether an operation kind is generated at all."""
        return getattr(self, operation) is not False
