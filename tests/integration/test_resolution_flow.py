"""Integration test for the full resolution workflow.

Covers: configuration loading, registry building, listener subscription,
lazy loading through the metadata factory, warm-up of all metadata, and
lookups by abstract type name.
"""

from __future__ import annotations

from typing import Any

import pytest

from retarget import (
    DictMappingDriver,
    InvalidMappingError,
    RelationshipKind,
    ResolveTargetListener,
    Session,
    TargetRegistry,
    load_config,
)

# A reusable billing module maps its relationships against contracts; the
# application supplies the concrete types.
BILLING = {
    "billing.Invoice": {
        "identifier": ["id"],
        "fields": {"id": None, "total": None},
        "relationships": [
            {
                "kind": "many_to_one",
                "field_name": "customer",
                "target_type": "\\billing.contracts.Customer",
                "cascade": ["persist"],
            },
            {
                "kind": "one_to_many",
                "field_name": "lines",
                "target_type": "billing.InvoiceLine",
                "mapped_by": "invoice",
            },
            {
                "kind": "many_to_many",
                "field_name": "tags",
                "target_type": "billing.contracts.Tag",
            },
        ],
    },
    "billing.InvoiceLine": {
        "identifier": ["id"],
        "fields": {"id": None},
        "relationships": [
            {
                "kind": "many_to_one",
                "field_name": "invoice",
                "target_type": "billing.Invoice",
                "inversed_by": "lines",
            }
        ],
    },
}

APP = {
    "app.Customer": {
        "identifier": ["tenant", "number"],
        "fields": {"tenant": None, "number": None, "name": None},
    },
    "app.Tag": {"identifier": ["id"], "fields": {"id": None, "label": None}},
}

CONFIG = {
    "resolve_target_entities": {
        "billing.contracts.Customer": {
            "target": "app.Customer",
            "mapping": {"fetch": "eager"},
        },
        "\\billing.contracts.Tag": "app.Tag",
    },
    "freeze": True,
}


@pytest.fixture
def session() -> Session:
    registry = TargetRegistry.from_config(load_config(CONFIG))
    session = Session.create(DictMappingDriver({**APP, **BILLING}))
    ResolveTargetListener(registry).subscribe(session.event_manager)
    return session


class TestResolutionFlow:
    def test_warm_up_resolves_every_relationship(self, session: Session) -> None:
        session.metadata_factory.get_all_metadata()
        invoice = session.get_metadata("billing.Invoice")

        customer = invoice.relationships["customer"]
        assert customer.target_type == "app.Customer"
        assert customer.kind is RelationshipKind.MANY_TO_ONE
        assert customer.fetch.value == "eager"
        assert [option.value for option in customer.cascade] == ["persist"]
        assert [(c.name, c.referenced_column_name) for c in customer.join_columns] == [
            ("customer_tenant", "tenant"),
            ("customer_number", "number"),
        ]

        tags = invoice.relationships["tags"]
        assert tags.target_type == "app.Tag"
        assert tags.kind is RelationshipKind.MANY_TO_MANY

        lines = invoice.relationships["lines"]
        assert lines.target_type == "billing.InvoiceLine"

    def test_relationship_order_after_remap(self, session: Session) -> None:
        invoice = session.get_metadata("billing.Invoice")
        # Remapped entries are re-inserted at the end of the collection.
        assert invoice.relationship_names == ["lines", "customer", "tags"]

    def test_lazy_load_before_target_skips_synthesis(self, session: Session) -> None:
        invoice = session.get_metadata("billing.Invoice")
        customer = invoice.relationships["customer"]
        assert customer.target_type == "app.Customer"
        assert [c.name for c in customer.join_columns] == ["customer_id"]

    def test_abstract_name_resolves_to_concrete_metadata(self, session: Session) -> None:
        customer = session.get_metadata("billing.contracts.Customer")
        assert customer.name == "app.Customer"
        assert session.get_metadata("app.Customer") is customer

    def test_abstract_name_after_concrete_load(self, session: Session) -> None:
        tag = session.get_metadata("app.Tag")
        assert session.metadata_factory.has_metadata_for("billing.contracts.Tag")
        assert session.get_metadata("\\billing.contracts.Tag") is tag

    def test_invalid_override_aborts_load(self) -> None:
        registry = TargetRegistry()
        registry.register("billing.contracts.Customer", "app.Customer", {"orphan_removal": True})
        registry.register("billing.contracts.Tag", "app.Tag")
        session = Session.create(DictMappingDriver({**APP, **BILLING}))
        ResolveTargetListener(registry).subscribe(session.event_manager)

        with pytest.raises(InvalidMappingError, match="orphan_removal"):
            session.get_metadata("billing.Invoice")
        assert session.metadata_factory.has_metadata_for("billing.Invoice") is False

    def test_independent_sessions_share_registry(self) -> None:
        registry = TargetRegistry.from_config(load_config(CONFIG))
        results: list[Any] = []
        for _ in range(2):
            session = Session.create(DictMappingDriver({**APP, **BILLING}))
            ResolveTargetListener(registry).subscribe(session.event_manager)
            session.metadata_factory.get_all_metadata()
            results.append(session.get_metadata("billing.Invoice").relationships["customer"])
        assert results[0] == results[1]
        assert "join_columns" not in registry.get("billing.contracts.Customer").overrides
