"""retarget exception hierarchy.

Errors raised by metadata add-operations are never wrapped by the
resolution listener; they reach the caller of the loading event as-is.
"""

from __future__ import annotations


class RetargetError(Exception):
    """Base exception for all retarget errors."""


# --- Registry ---


class RegistryError(RetargetError):
    """Base for target registry errors."""


class TargetNotRegisteredError(RegistryError):
    """Raised when an abstract type has no resolution record."""

    def __init__(self, abstract_type: str) -> None:
        self.abstract_type = abstract_type
        super().__init__(f"No target registered for '{abstract_type}'")


class RegistryFrozenError(RegistryError):
    """Raised when registering into a registry whose configuration phase ended."""

    def __init__(self, abstract_type: str) -> None:
        self.abstract_type = abstract_type
        super().__init__(
            f"Cannot register '{abstract_type}': target registry is frozen"
        )


# --- Mapping ---


class MappingError(RetargetError):
    """Base for relationship mapping errors."""


class InvalidMappingError(MappingError):
    """Raised when a relationship mapping fails validation."""

    def __init__(self, entity: str, field_name: str | None, detail: str) -> None:
        self.entity = entity
        self.field_name = field_name
        location = f"{entity}.{field_name}" if field_name else entity
        super().__init__(f"Invalid mapping for '{location}': {detail}")


class DuplicateMappingError(MappingError):
    """Raised when a field name is mapped twice on the same entity."""

    def __init__(self, entity: str, field_name: str) -> None:
        self.entity = entity
        self.field_name = field_name
        super().__init__(f"Field '{field_name}' is already mapped on '{entity}'")


class RelationshipNotFoundError(MappingError):
    """Raised when a relationship lookup or removal names an unknown field."""

    def __init__(self, entity: str, field_name: str) -> None:
        self.entity = entity
        self.field_name = field_name
        super().__init__(f"No relationship '{field_name}' on '{entity}'")


# --- Metadata ---


class MetadataError(RetargetError):
    """Base for metadata factory errors."""


class MetadataNotFoundError(MetadataError):
    """Raised when no metadata can be loaded for a type name."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"No metadata found for '{type_name}'")


# --- Resolution ---


class ResolutionError(RetargetError):
    """Base for target resolution errors."""


class UnsupportedIdentifierError(ResolutionError):
    """Raised when an identifier cannot be flattened into join columns."""

    def __init__(self, target_type: str, component: str, detail: str) -> None:
        self.target_type = target_type
        self.component = component
        super().__init__(
            f"Cannot synthesize join columns for '{target_type}.{component}': {detail}"
        )


# --- Configuration ---


class ConfigurationError(RetargetError):
    """Raised when a resolve-target configuration payload is invalid."""
