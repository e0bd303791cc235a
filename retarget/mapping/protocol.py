"""Metadata collaborator protocols.

ResolveTargetListener only talks to metadata, the metadata factory and the
session through these protocols. EntityMetadata, MetadataFactory and
Session implement them; other metadata systems can too.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from retarget.mapping.definition import RelationshipDefinition


@runtime_checkable
class MetadataHandle(Protocol):
    """Metadata of one type, as seen by the resolution listener."""

    name: str

    @property
    def relationships(self) -> Mapping[str, RelationshipDefinition]:
        """Ordered field name -> relationship definition."""
        ...

    def get_identifier_components(self) -> list[str]:
        """Ordered identifier component names."""
        ...

    def is_relationship_component(self, field_name: str) -> bool:
        """Check if an identifier component is itself a relationship."""
        ...

    def get_relationship_definition(self, field_name: str) -> RelationshipDefinition:
        """Return the relationship mapped under *field_name*."""
        ...

    def remove_relationship(self, field_name: str) -> Any:
        """Remove the relationship mapped under *field_name*."""
        ...

    def restore_relationship(self, definition: Any, position: int | None = None) -> None:
        """Put back a removed definition at *position* in the relationship order."""
        ...

    def map_many_to_many(self, mapping: Mapping[str, Any]) -> Any: ...

    def map_many_to_one(self, mapping: Mapping[str, Any]) -> Any: ...

    def map_one_to_many(self, mapping: Mapping[str, Any]) -> Any: ...

    def map_one_to_one(self, mapping: Mapping[str, Any]) -> Any: ...


@runtime_checkable
class MetadataFactoryHandle(Protocol):
    """Owner of loaded metadata."""

    def has_metadata_for(self, type_name: str) -> bool:
        """Check if metadata for *type_name* is already loaded."""
        ...

    def set_metadata_for(self, type_name: str, metadata: Any) -> None:
        """Make *metadata* available under *type_name*."""
        ...


@runtime_checkable
class SessionHandle(Protocol):
    """Session giving access to the metadata factory."""

    metadata_factory: MetadataFactoryHandle

    def get_metadata(self, type_name: str) -> MetadataHandle:
        """Return metadata for *type_name*, loading it if needed."""
        ...
