"""Metadata factory and session.

MetadataFactory loads metadata through a MappingDriver, fires the loading
events, and caches the result per type name. Session is the handle given to
event listeners.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from retarget.core.events import (
    EventManager,
    Events,
    LoadClassMetadataEventArgs,
    OnClassMetadataNotFoundEventArgs,
)
from retarget.core.exceptions import MetadataNotFoundError
from retarget.core.names import normalize_type_name
from retarget.mapping.driver import MappingDriver
from retarget.mapping.metadata import EntityMetadata

logger = logging.getLogger(__name__)


class MetadataFactory:
    """Loads and caches EntityMetadata per type name.

    Metadata is loaded lazily on the first ``get_metadata_for`` call.
    ``Events.LOAD_CLASS_METADATA`` fires after the driver populated the
    metadata and before it is cached, so a listener error leaves nothing
    cached for that type, including aliases listeners set for it.
    """

    def __init__(
        self,
        driver: MappingDriver,
        event_manager: EventManager | None = None,
    ) -> None:
        self._driver = driver
        self.event_manager = event_manager or EventManager()
        self._loaded: dict[str, EntityMetadata] = {}
        self.session: Session | None = None

    def has_metadata_for(self, type_name: str) -> bool:
        """Check if metadata is already loaded. Never triggers loading."""
        return normalize_type_name(type_name) in self._loaded

    def set_metadata_for(self, type_name: str, metadata: EntityMetadata) -> None:
        """Cache *metadata* under *type_name*."""
        self._loaded[normalize_type_name(type_name)] = metadata

    def get_metadata_for(self, type_name: str) -> EntityMetadata:
        """Return metadata for *type_name*, loading it on first use.

        Raises:
            MetadataNotFoundError: If neither the driver nor an
                ``on_class_metadata_not_found`` listener supplies metadata.
        """
        name = normalize_type_name(type_name)
        cached = self._loaded.get(name)
        if cached is not None:
            return cached

        metadata = self._driver.load_metadata(name)
        if metadata is None:
            return self._handle_not_found(name)

        logger.debug("Loaded metadata for %s", name)
        try:
            self.event_manager.dispatch(
                Events.LOAD_CLASS_METADATA,
                LoadClassMetadataEventArgs(metadata=metadata, session=self._session()),
            )
        except Exception:
            self._discard(metadata)
            raise
        self._loaded[name] = metadata
        return metadata

    def get_all_metadata(self) -> list[EntityMetadata]:
        """Load metadata for every type the driver knows."""
        return [self.get_metadata_for(name) for name in self._driver.get_all_type_names()]

    @property
    def loaded_metadata(self) -> Mapping[str, EntityMetadata]:
        """Read-only view of loaded type name -> metadata."""
        return MappingProxyType(self._loaded)

    def _handle_not_found(self, name: str) -> EntityMetadata:
        args = OnClassMetadataNotFoundEventArgs(class_name=name, session=self._session())
        self.event_manager.dispatch(Events.ON_CLASS_METADATA_NOT_FOUND, args)
        if args.found_metadata is None:
            raise MetadataNotFoundError(name)
        self._loaded[name] = args.found_metadata
        return args.found_metadata

    def _discard(self, metadata: EntityMetadata) -> None:
        # Listeners may have cached aliases of metadata whose load failed.
        for alias in [key for key, value in self._loaded.items() if value is metadata]:
            logger.debug("Dropping alias %s of %s after failed load", alias, metadata.name)
            del self._loaded[alias]

    def _session(self) -> Session:
        if self.session is None:
            self.session = Session(self)
        return self.session


class Session:
    """Entry point to loaded metadata, handed to event listeners."""

    def __init__(self, metadata_factory: MetadataFactory) -> None:
        self.metadata_factory = metadata_factory
        metadata_factory.session = self

    @classmethod
    def create(
        cls,
        driver: MappingDriver,
        event_manager: EventManager | None = None,
    ) -> Session:
        """Create a Session over a new MetadataFactory."""
        return cls(MetadataFactory(driver, event_manager))

    @property
    def event_manager(self) -> EventManager:
        return self.metadata_factory.event_manager

    def get_metadata(self, type_name: str) -> EntityMetadata:
        """Return metadata for *type_name*, loading it if needed."""
        return self.metadata_factory.get_metadata_for(type_name)
