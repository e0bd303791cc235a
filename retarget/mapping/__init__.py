"""Mapping layer - entity metadata, relationship definitions and loading."""

from __future__ import annotations

from retarget.mapping.definition import JoinColumn, RelationshipDefinition
from retarget.mapping.driver import (
    DictMappingDriver,
    EntityDeclaration,
    MappingDriver,
    RelationshipDeclaration,
)
from retarget.mapping.factory import MetadataFactory, Session
from retarget.mapping.metadata import EntityMetadata
from retarget.mapping.protocol import MetadataFactoryHandle, MetadataHandle, SessionHandle

__all__ = [
    "EntityMetadata",
    "JoinColumn",
    "RelationshipDefinition",
    "MappingDriver",
    "DictMappingDriver",
    "EntityDeclaration",
    "RelationshipDeclaration",
    "MetadataFactory",
    "Session",
    "MetadataHandle",
    "MetadataFactoryHandle",
    "SessionHandle",
]
