"""Resolve-target listener.

Rewrites relationships declared against abstract types once their owning
type's metadata is loaded:

    registry = TargetRegistry()
    registry.register("app.contracts.Customer", "app.entities.Customer")

    session = Session.create(driver)
    ResolveTargetListener(registry).subscribe(session.event_manager)

    order = session.get_metadata("app.entities.Order")
    order.relationships["customer"].target_type  # "app.entities.Customer"
"""

from __future__ import annotations

import copy
import logging

from retarget.core.enums import RelationshipKind
from retarget.core.events import (
    EventManager,
    Events,
    LoadClassMetadataEventArgs,
    OnClassMetadataNotFoundEventArgs,
)
from retarget.core.merge import merge_recursive
from retarget.core.registry import TargetRegistry
from retarget.mapping.definition import RelationshipDefinition
from retarget.mapping.protocol import MetadataHandle, SessionHandle
from retarget.resolution.identifiers import join_column_mappings, mapped_identifier_columns

logger = logging.getLogger(__name__)

# Relationship kind -> name of the metadata add-operation.
_ADD_OPERATIONS: dict[RelationshipKind, str] = {
    RelationshipKind.MANY_TO_MANY: "map_many_to_many",
    RelationshipKind.MANY_TO_ONE: "map_many_to_one",
    RelationshipKind.ONE_TO_MANY: "map_one_to_many",
    RelationshipKind.ONE_TO_ONE: "map_one_to_one",
}


class ResolveTargetListener:
    """Replaces abstract relationship targets with their registered concrete types.

    The listener only reads the registry. Its single effect is the
    rewrite of relationships on the metadata passed to it.

    Args:
        registry: Populated target registry.
    """

    def __init__(self, registry: TargetRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> TargetRegistry:
        return self._registry

    def get_subscribed_events(self) -> list[str]:
        return [Events.LOAD_CLASS_METADATA, Events.ON_CLASS_METADATA_NOT_FOUND]

    def subscribe(self, event_manager: EventManager) -> None:
        """Attach this listener to *event_manager*."""
        event_manager.add_subscriber(self)

    def load_class_metadata(self, args: LoadClassMetadataEventArgs) -> None:
        """Remap every relationship of the loaded type that targets a registered type."""
        metadata = args.metadata
        # remap() removes and re-adds entries, so iterate over a snapshot.
        for definition in list(metadata.relationships.values()):
            if self._registry.has(definition.target_type):
                self.remap(metadata, definition, args.session)

        for abstract_type, record in self._registry.items():
            if record.concrete_type == metadata.name:
                logger.info("Aliasing metadata %s as %s", metadata.name, abstract_type)
                args.session.metadata_factory.set_metadata_for(abstract_type, metadata)

    def on_class_metadata_not_found(self, args: OnClassMetadataNotFoundEventArgs) -> None:
        """Answer a metadata request for an abstract type with the concrete metadata."""
        record = self._registry.lookup(args.class_name)
        if record is None:
            return
        args.found_metadata = args.session.get_metadata(record.concrete_type)

    def remap(
        self,
        metadata: MetadataHandle,
        definition: RelationshipDefinition,
        session: SessionHandle,
    ) -> None:
        """Replace *definition* on *metadata* with its resolved form.

        Errors from the metadata add-operation propagate unchanged. The
        original definition is restored in its place before they do.
        """
        record = self._registry.get(definition.target_type)
        overrides = copy.deepcopy(record.overrides)
        resolved_target = record.concrete_type
        field_name = definition.field_name

        if session.metadata_factory.has_metadata_for(resolved_target):
            target = session.get_metadata(resolved_target)
            if len(target.get_identifier_components()) > 1:
                columns = mapped_identifier_columns(field_name, target, session)
                overrides["join_columns"] = [
                    *(overrides.get("join_columns") or ()),
                    *join_column_mappings(columns),
                ]

        mapping = merge_recursive(definition.to_mapping(), overrides)
        mapping["field_name"] = field_name

        logger.debug(
            "Remapping %s.%s: %s -> %s",
            metadata.name,
            field_name,
            definition.target_type,
            resolved_target,
        )
        position = list(metadata.relationships).index(field_name)
        original = metadata.remove_relationship(field_name)
        try:
            getattr(metadata, _ADD_OPERATIONS[definition.kind])(mapping)
        except Exception:
            metadata.restore_relationship(original, position)
            raise
