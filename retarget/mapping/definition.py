"""Relationship definition data classes.

Frozen dataclasses describing one relationship between two types. A
definition is never edited in place: a change produces a new definition
that replaces the old one on its EntityMetadata.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from retarget.core.enums import CascadeOption, FetchMode, RelationshipKind


@dataclass(frozen=True)
class JoinColumn:
    """Correlates a local column with a column of the target table."""

    name: str
    referenced_column_name: str = "id"
    nullable: bool = True
    unique: bool = False
    on_delete: str | None = None

    def to_mapping(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "referenced_column_name": self.referenced_column_name,
            "nullable": self.nullable,
            "unique": self.unique,
            "on_delete": self.on_delete,
        }


@dataclass(frozen=True)
class RelationshipDefinition:
    """Mapping of one relationship field.

    ``is_owning_side`` and ``join_column_field_names`` are derived by the
    metadata add-operation and are not part of ``to_mapping()``.
    """

    field_name: str
    target_type: str
    kind: RelationshipKind
    source_type: str = ""
    join_columns: tuple[JoinColumn, ...] = ()
    mapped_by: str | None = None
    inversed_by: str | None = None
    cascade: tuple[CascadeOption, ...] = ()
    fetch: FetchMode = FetchMode.LAZY
    orphan_removal: bool = False
    join_table: str | None = None
    order_by: dict[str, str] = field(default_factory=dict)
    index_by: str | None = None
    is_owning_side: bool = True
    join_column_field_names: dict[str, str] = field(default_factory=dict)

    @property
    def is_collection(self) -> bool:
        return not self.kind.is_to_one

    def to_mapping(self) -> dict[str, Any]:
        """Return the declarative attributes as a plain mapping."""
        return {
            "field_name": self.field_name,
            "target_type": self.target_type,
            "join_columns": [column.to_mapping() for column in self.join_columns],
            "mapped_by": self.mapped_by,
            "inversed_by": self.inversed_by,
            "cascade": [option.value for option in self.cascade],
            "fetch": self.fetch.value,
            "orphan_removal": self.orphan_removal,
            "join_table": self.join_table,
            "order_by": dict(self.order_by),
            "index_by": self.index_by,
        }


# Keys accepted by the metadata add-operations.
MAPPING_KEYS = frozenset(
    {
        "field_name",
        "target_type",
        "join_columns",
        "mapped_by",
        "inversed_by",
        "cascade",
        "fetch",
        "orphan_removal",
        "join_table",
        "order_by",
        "index_by",
    }
)

JOIN_COLUMN_KEYS = frozenset(
    {"name", "referenced_column_name", "nullable", "unique", "on_delete"}
)
