"""Entity metadata.

EntityMetadata holds the scalar fields, identifier and relationship
definitions of one type. Relationships are kept in an ordered mapping keyed
by field name; they are added through the four ``map_*`` operations, which
validate and complete the mapping, and removed with ``remove_relationship``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from retarget.core.enums import CascadeOption, FetchMode, RelationshipKind
from retarget.core.exceptions import (
    DuplicateMappingError,
    InvalidMappingError,
    RelationshipNotFoundError,
)
from retarget.core.names import normalize_type_name, snake_case
from retarget.mapping.definition import (
    JOIN_COLUMN_KEYS,
    MAPPING_KEYS,
    JoinColumn,
    RelationshipDefinition,
)

_CASCADE_ALL = "all"


class EntityMetadata:
    """Mapping metadata for a single type.

    Args:
        name: Type name. Leading namespace separators are stripped.
    """

    def __init__(self, name: str | type) -> None:
        self.name = normalize_type_name(name)
        self.identifier: list[str] = []
        self._fields: dict[str, str] = {}  # field_name -> column_name
        self._relationships: dict[str, RelationshipDefinition] = {}

    def __repr__(self) -> str:
        return (
            f"<EntityMetadata {self.name} identifier={self.identifier} "
            f"fields={list(self._fields)} relationships={list(self._relationships)}>"
        )

    # --- Fields and identifier ---

    def map_field(self, field_name: str, column_name: str | None = None, *, id: bool = False) -> None:  # noqa: A002
        """Map a scalar field, optionally as an identifier component."""
        if field_name in self._fields or field_name in self._relationships:
            raise DuplicateMappingError(self.name, field_name)
        self._fields[field_name] = column_name or field_name
        if id and field_name not in self.identifier:
            self.identifier.append(field_name)

    def set_identifier(self, components: Iterable[str]) -> None:
        """Replace the identifier with *components*, in order."""
        self.identifier = list(components)

    def get_identifier_components(self) -> list[str]:
        return list(self.identifier)

    @property
    def is_identifier_composite(self) -> bool:
        return len(self.identifier) > 1

    @property
    def fields(self) -> Mapping[str, str]:
        """Read-only view of scalar field name -> column name."""
        return MappingProxyType(self._fields)

    def has_field(self, field_name: str) -> bool:
        return field_name in self._fields

    # --- Relationships ---

    @property
    def relationships(self) -> Mapping[str, RelationshipDefinition]:
        """Read-only ordered view of field name -> relationship definition.

        The view is live; take ``list(metadata.relationships.values())`` before
        adding or removing relationships in a loop.
        """
        return MappingProxyType(self._relationships)

    @property
    def relationship_names(self) -> list[str]:
        return list(self._relationships)

    def has_relationship(self, field_name: str) -> bool:
        return field_name in self._relationships

    def get_relationship_definition(self, field_name: str) -> RelationshipDefinition:
        try:
            return self._relationships[field_name]
        except KeyError:
            raise RelationshipNotFoundError(self.name, field_name) from None

    def is_relationship_component(self, field_name: str) -> bool:
        """Check if identifier component *field_name* is a relationship."""
        return field_name in self.identifier and field_name in self._relationships

    def remove_relationship(self, field_name: str) -> RelationshipDefinition:
        """Remove and return the relationship mapped under *field_name*."""
        try:
            return self._relationships.pop(field_name)
        except KeyError:
            raise RelationshipNotFoundError(self.name, field_name) from None

    def restore_relationship(
        self, definition: RelationshipDefinition, position: int | None = None
    ) -> None:
        """Put back a definition taken out with ``remove_relationship``.

        The definition is not validated again. It is inserted at *position*
        in the relationship order, or appended when *position* is None.

        Raises:
            DuplicateMappingError: If the field name is mapped again meanwhile.
        """
        field_name = definition.field_name
        if field_name in self._fields or field_name in self._relationships:
            raise DuplicateMappingError(self.name, field_name)
        items = list(self._relationships.items())
        index = len(items) if position is None else position
        items.insert(index, (field_name, definition))
        self._relationships = dict(items)

    def map_many_to_many(self, mapping: Mapping[str, Any]) -> RelationshipDefinition:
        """Add a many-to-many relationship."""
        return self.map_relationship(RelationshipKind.MANY_TO_MANY, mapping)

    def map_many_to_one(self, mapping: Mapping[str, Any]) -> RelationshipDefinition:
        """Add a many-to-one relationship."""
        return self.map_relationship(RelationshipKind.MANY_TO_ONE, mapping)

    def map_one_to_many(self, mapping: Mapping[str, Any]) -> RelationshipDefinition:
        """Add a one-to-many relationship. ``mapped_by`` is required."""
        return self.map_relationship(RelationshipKind.ONE_TO_MANY, mapping)

    def map_one_to_one(self, mapping: Mapping[str, Any]) -> RelationshipDefinition:
        """Add a one-to-one relationship."""
        return self.map_relationship(RelationshipKind.ONE_TO_ONE, mapping)

    def map_relationship(
        self, kind: RelationshipKind, mapping: Mapping[str, Any]
    ) -> RelationshipDefinition:
        """Validate *mapping*, complete defaults and add it as a *kind* relationship.

        Raises:
            InvalidMappingError: If the mapping is malformed.
            DuplicateMappingError: If the field name is already mapped.
        """
        definition = self._validate_and_complete(kind, mapping)
        self._relationships[definition.field_name] = definition
        return definition

    # --- Validation ---

    def _validate_and_complete(
        self, kind: RelationshipKind, mapping: Mapping[str, Any]
    ) -> RelationshipDefinition:
        field_name = mapping.get("field_name")
        if not field_name or not isinstance(field_name, str):
            raise InvalidMappingError(self.name, None, "field_name is required")

        unknown = set(mapping) - MAPPING_KEYS
        if unknown:
            raise InvalidMappingError(
                self.name, field_name, f"unknown mapping keys {sorted(unknown)}"
            )

        if field_name in self._fields or field_name in self._relationships:
            raise DuplicateMappingError(self.name, field_name)

        target_type = mapping.get("target_type")
        if not target_type or not isinstance(target_type, (str, type)):
            raise InvalidMappingError(self.name, field_name, "target_type is required")

        mapped_by = mapping.get("mapped_by")
        inversed_by = mapping.get("inversed_by")
        if mapped_by and inversed_by:
            raise InvalidMappingError(
                self.name, field_name, "mapped_by and inversed_by are mutually exclusive"
            )
        if kind is RelationshipKind.ONE_TO_MANY and not mapped_by:
            raise InvalidMappingError(
                self.name, field_name, "one-to-many relationships require mapped_by"
            )
        if kind is RelationshipKind.MANY_TO_ONE and mapped_by:
            raise InvalidMappingError(
                self.name, field_name, "many-to-one relationships are always the owning side"
            )
        is_owning_side = not mapped_by

        orphan_removal = bool(mapping.get("orphan_removal", False))
        if orphan_removal and kind not in (RelationshipKind.ONE_TO_ONE, RelationshipKind.ONE_TO_MANY):
            raise InvalidMappingError(
                self.name, field_name, f"orphan_removal is not supported on {kind.value}"
            )

        join_columns: tuple[JoinColumn, ...] = ()
        if is_owning_side and kind is not RelationshipKind.ONE_TO_MANY:
            join_columns = self._complete_join_columns(
                kind, field_name, mapping.get("join_columns") or ()
            )

        join_table = mapping.get("join_table")
        if kind is RelationshipKind.MANY_TO_MANY and is_owning_side and not join_table:
            join_table = f"{snake_case(self.name)}_{snake_case(normalize_type_name(target_type))}"

        join_column_field_names: dict[str, str] = {}
        if kind.is_to_one:
            join_column_field_names = {column.name: column.name for column in join_columns}

        return RelationshipDefinition(
            field_name=field_name,
            target_type=normalize_type_name(target_type),
            kind=kind,
            source_type=self.name,
            join_columns=join_columns,
            mapped_by=mapped_by,
            inversed_by=inversed_by,
            cascade=self._parse_cascade(field_name, mapping.get("cascade") or ()),
            fetch=self._parse_fetch(field_name, mapping.get("fetch")),
            orphan_removal=orphan_removal,
            join_table=join_table,
            order_by=dict(mapping.get("order_by") or {}),
            index_by=mapping.get("index_by"),
            is_owning_side=is_owning_side,
            join_column_field_names=join_column_field_names,
        )

    def _complete_join_columns(
        self, kind: RelationshipKind, field_name: str, raw_columns: Iterable[Any]
    ) -> tuple[JoinColumn, ...]:
        columns: list[JoinColumn] = []
        for raw in raw_columns:
            if isinstance(raw, JoinColumn):
                raw = raw.to_mapping()
            if not isinstance(raw, Mapping):
                raise InvalidMappingError(
                    self.name, field_name, f"join column must be a mapping, got {raw!r}"
                )
            unknown = set(raw) - JOIN_COLUMN_KEYS
            if unknown:
                raise InvalidMappingError(
                    self.name, field_name, f"unknown join column keys {sorted(unknown)}"
                )
            referenced = raw.get("referenced_column_name") or "id"
            columns.append(
                JoinColumn(
                    name=raw.get("name") or f"{field_name}_{referenced}",
                    referenced_column_name=referenced,
                    nullable=bool(raw.get("nullable", True)),
                    unique=bool(raw.get("unique", False)),
                    on_delete=raw.get("on_delete"),
                )
            )

        if not columns and kind.is_to_one:
            columns.append(JoinColumn(name=f"{field_name}_id"))

        seen: set[str] = set()
        for column in columns:
            if column.name in seen:
                raise InvalidMappingError(
                    self.name, field_name, f"duplicate join column '{column.name}'"
                )
            seen.add(column.name)
        return tuple(columns)

    def _parse_cascade(self, field_name: str, raw: Iterable[Any]) -> tuple[CascadeOption, ...]:
        if isinstance(raw, str):
            raw = [raw]
        options: list[CascadeOption] = []
        for value in raw:
            if isinstance(value, CascadeOption):
                value = value.value
            if value == _CASCADE_ALL:
                candidates = list(CascadeOption)
            else:
                try:
                    candidates = [CascadeOption(value)]
                except ValueError:
                    raise InvalidMappingError(
                        self.name, field_name, f"unknown cascade option {value!r}"
                    ) from None
            for option in candidates:
                if option not in options:
                    options.append(option)
        return tuple(options)

    def _parse_fetch(self, field_name: str, raw: Any) -> FetchMode:
        if raw is None:
            return FetchMode.LAZY
        if isinstance(raw, FetchMode):
            return raw
        try:
            return FetchMode(raw)
        except ValueError:
            raise InvalidMappingError(
                self.name, field_name, f"unknown fetch mode {raw!r}"
            ) from None