"""Relationship enumerations."""

from __future__ import annotations

from enum import Enum


class RelationshipKind(Enum):
    """Supported relationship kinds."""

    MANY_TO_MANY = "many_to_many"
    MANY_TO_ONE = "many_to_one"
    ONE_TO_MANY = "one_to_many"
    ONE_TO_ONE = "one_to_one"

    @property
    def is_to_one(self) -> bool:
        return self in (RelationshipKind.MANY_TO_ONE, RelationshipKind.ONE_TO_ONE)


class FetchMode(Enum):
    """Loading strategy for a relationship."""

    LAZY = "lazy"
    EAGER = "eager"
    EXTRA_LAZY = "extra_lazy"


class CascadeOption(Enum):
    """Operations cascaded from the owning entity to its related entities."""

    PERSIST = "persist"
    REMOVE = "remove"
    MERGE = "merge"
    REFRESH = "refresh"
    DETACH = "detach"
