"""Contract tests for metadata collaborator protocol compliance."""

from __future__ import annotations

from retarget.core.events import EventSubscriber
from retarget.core.registry import TargetRegistry
from retarget.mapping.driver import DictMappingDriver, MappingDriver
from retarget.mapping.factory import MetadataFactory, Session
from retarget.mapping.metadata import EntityMetadata
from retarget.mapping.protocol import MetadataFactoryHandle, MetadataHandle, SessionHandle
from retarget.resolution.listener import ResolveTargetListener


class TestEntityMetadataProtocol:
    def test_implements_metadata_protocol(self) -> None:
        assert isinstance(EntityMetadata("app.A"), MetadataHandle)

    def test_add_operations_return_definition(self) -> None:
        metadata = EntityMetadata("app.A")
        definition = metadata.map_many_to_one({"field_name": "b", "target_type": "app.B"})
        assert metadata.get_relationship_definition("b") is definition


class TestFactoryAndSessionProtocol:
    def test_factory_implements_protocol(self) -> None:
        factory = MetadataFactory(DictMappingDriver({}))
        assert isinstance(factory, MetadataFactoryHandle)

    def test_session_implements_protocol(self) -> None:
        session = Session.create(DictMappingDriver({}))
        assert isinstance(session, SessionHandle)


class TestDriverProtocol:
    def test_dict_driver_implements_protocol(self) -> None:
        assert isinstance(DictMappingDriver({}), MappingDriver)


class TestListenerProtocol:
    def test_listener_is_event_subscriber(self) -> None:
        assert isinstance(ResolveTargetListener(TargetRegistry()), EventSubscriber)

    def test_subscribed_events_have_handlers(self) -> None:
        listener = ResolveTargetListener(TargetRegistry())
        for event_name in listener.get_subscribed_events():
            assert callable(getattr(listener, event_name))
