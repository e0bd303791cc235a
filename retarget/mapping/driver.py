"""Mapping drivers - produce EntityMetadata from declarations.

DictMappingDriver reads declarations from plain dicts, validated with
Pydantic:

    driver = DictMappingDriver({
        "app.Order": {
            "identifier": ["id"],
            "fields": {"id": None, "total": "total_cents"},
            "relationships": [
                {"kind": "many_to_one", "field_name": "customer",
                 "target_type": "app.contracts.Customer"},
            ],
        },
    })
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, ValidationError

from retarget.core.enums import RelationshipKind
from retarget.core.exceptions import ConfigurationError
from retarget.core.names import normalize_type_name
from retarget.mapping.metadata import EntityMetadata


@runtime_checkable
class MappingDriver(Protocol):
    """Source of entity metadata."""

    def load_metadata(self, type_name: str) -> EntityMetadata | None:
        """Build metadata for *type_name*, or return None if unknown."""
        ...

    def get_all_type_names(self) -> list[str]:
        """Names of every type this driver can load."""
        ...


class RelationshipDeclaration(BaseModel):
    """A relationship declaration: its kind plus the raw mapping attributes."""

    model_config = ConfigDict(extra="allow")

    kind: RelationshipKind

    def mapping(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class EntityDeclaration(BaseModel):
    """Declaration of one type's fields, identifier and relationships."""

    identifier: list[str] = []
    fields: dict[str, str | None] = {}
    relationships: list[RelationshipDeclaration] = []


class DictMappingDriver:
    """Driver backed by a dict of type name -> declaration.

    Declarations are validated up front.

    Raises:
        ConfigurationError: If a declaration is malformed.
    """

    def __init__(self, declarations: dict[str, dict[str, Any] | EntityDeclaration]) -> None:
        self._declarations: dict[str, EntityDeclaration] = {}
        for type_name, declaration in declarations.items():
            try:
                parsed = EntityDeclaration.model_validate(declaration)
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid declaration for '{type_name}': {e}"
                ) from e
            self._declarations[normalize_type_name(type_name)] = parsed

    def get_all_type_names(self) -> list[str]:
        return list(self._declarations)

    def load_metadata(self, type_name: str) -> EntityMetadata | None:
        declaration = self._declarations.get(normalize_type_name(type_name))
        if declaration is None:
            return None

        metadata = EntityMetadata(type_name)
        for field_name, column_name in declaration.fields.items():
            metadata.map_field(field_name, column_name)
        for relationship in declaration.relationships:
            metadata.map_relationship(relationship.kind, relationship.mapping())
        metadata.set_identifier(declaration.identifier)
        return metadata
