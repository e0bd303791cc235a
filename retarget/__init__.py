"""retarget - resolve abstract relationship targets to concrete types."""

from __future__ import annotations

from retarget.core.config import ResolveTargetConfig, TargetResolution, load_config
from retarget.core.enums import CascadeOption, FetchMode, RelationshipKind
from retarget.core.events import (
    EventManager,
    Events,
    LoadClassMetadataEventArgs,
    OnClassMetadataNotFoundEventArgs,
)
from retarget.core.exceptions import (
    ConfigurationError,
    DuplicateMappingError,
    InvalidMappingError,
    MappingError,
    MetadataError,
    MetadataNotFoundError,
    RegistryError,
    RegistryFrozenError,
    RelationshipNotFoundError,
    ResolutionError,
    RetargetError,
    TargetNotRegisteredError,
    UnsupportedIdentifierError,
)
from retarget.core.merge import merge_recursive
from retarget.core.names import normalize_type_name
from retarget.core.registry import ResolutionRecord, TargetRegistry
from retarget.mapping import (
    DictMappingDriver,
    EntityMetadata,
    JoinColumn,
    MetadataFactory,
    RelationshipDefinition,
    Session,
)
from retarget.resolution import ResolveTargetListener

__all__ = [
    # Registry
    "TargetRegistry",
    "ResolutionRecord",
    # Configuration
    "ResolveTargetConfig",
    "TargetResolution",
    "load_config",
    # Resolution
    "ResolveTargetListener",
    "merge_recursive",
    "normalize_type_name",
    # Mapping
    "EntityMetadata",
    "RelationshipDefinition",
    "JoinColumn",
    "DictMappingDriver",
    "MetadataFactory",
    "Session",
    # Events
    "EventManager",
    "Events",
    "LoadClassMetadataEventArgs",
    "OnClassMetadataNotFoundEventArgs",
    # Enums
    "RelationshipKind",
    "FetchMode",
    "CascadeOption",
    # Exceptions
    "RetargetError",
    "RegistryError",
    "TargetNotRegisteredError",
    "RegistryFrozenError",
    "MappingError",
    "InvalidMappingError",
    "DuplicateMappingError",
    "RelationshipNotFoundError",
    "MetadataError",
    "MetadataNotFoundError",
    "ResolutionError",
    "UnsupportedIdentifierError",
    "ConfigurationError",
]
