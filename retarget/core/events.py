"""Metadata event dispatch.

The metadata factory fires events while loading; listeners such as
ResolveTargetListener subscribe to them. Listeners run synchronously in
registration order and their exceptions propagate to the dispatcher's caller.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from retarget.mapping.metadata import EntityMetadata
    from retarget.mapping.protocol import SessionHandle


class Events:
    """Event names fired by the metadata factory."""

    LOAD_CLASS_METADATA = "load_class_metadata"
    ON_CLASS_METADATA_NOT_FOUND = "on_class_metadata_not_found"


@dataclass
class LoadClassMetadataEventArgs:
    """Fired once per type after its relationship mappings are populated."""

    metadata: EntityMetadata
    session: SessionHandle


@dataclass
class OnClassMetadataNotFoundEventArgs:
    """Fired when the driver has no metadata for a requested type name.

    A listener may set ``found_metadata`` to answer the request.
    """

    class_name: str
    session: SessionHandle
    found_metadata: EntityMetadata | None = None


@runtime_checkable
class EventSubscriber(Protocol):
    """An object whose methods are named after the events it handles."""

    def get_subscribed_events(self) -> list[str]: ...


class EventManager:
    """Synchronous event dispatcher."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Callable[[Any], None]]] = {}

    def add_listener(self, event_name: str, listener: Callable[[Any], None]) -> None:
        """Attach *listener* to *event_name*. Duplicates are ignored."""
        listeners = self._listeners.setdefault(event_name, [])
        if listener not in listeners:
            listeners.append(listener)

    def remove_listener(self, event_name: str, listener: Callable[[Any], None]) -> None:
        """Detach *listener* from *event_name* if attached."""
        listeners = self._listeners.get(event_name, [])
        if listener in listeners:
            listeners.remove(listener)

    def add_subscriber(self, subscriber: EventSubscriber) -> None:
        """Attach every ``subscriber.<event_name>`` method to its event."""
        for event_name in subscriber.get_subscribed_events():
            self.add_listener(event_name, getattr(subscriber, event_name))

    def has_listeners(self, event_name: str) -> bool:
        return bool(self._listeners.get(event_name))

    def get_listeners(self, event_name: str) -> list[Callable[[Any], None]]:
        return list(self._listeners.get(event_name, []))

    def dispatch(self, event_name: str, args: Any) -> None:
        """Invoke every listener of *event_name* with *args*."""
        for listener in self.get_listeners(event_name):
            listener(args)
