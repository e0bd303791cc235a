"""Unit tests for composite-identifier join-column synthesis."""

from __future__ import annotations

from typing import Any

import pytest

from retarget.core.exceptions import UnsupportedIdentifierError
from retarget.mapping.metadata import EntityMetadata
from retarget.resolution.identifiers import join_column_mappings, mapped_identifier_columns


def _account() -> EntityMetadata:
    """Account keyed by (customer, number); customer is a relationship."""
    account = EntityMetadata("app.Account")
    account.map_field("number")
    account.map_many_to_one(
        {
            "field_name": "customer",
            "target_type": "app.Customer",
            "join_columns": [{"name": "customer_id", "referenced_column_name": "id"}],
        }
    )
    account.set_identifier(["customer", "number"])
    return account


class TestMappedIdentifierColumns:
    def test_scalar_components(self) -> None:
        target = EntityMetadata("app.Owner")
        target.map_field("id1", id=True)
        target.map_field("id2", id=True)
        assert mapped_identifier_columns("owner", target) == {
            "owner_id1": "id1",
            "owner_id2": "id2",
        }

    def test_order_follows_identifier(self) -> None:
        target = EntityMetadata("app.Owner")
        target.map_field("a")
        target.map_field("b")
        target.set_identifier(["b", "a"])
        assert list(mapped_identifier_columns("owner", target)) == ["owner_b", "owner_a"]

    def test_relationship_component_flattened(self) -> None:
        assert mapped_identifier_columns("account", _account()) == {
            "account_customer_id": "customer_id",
            "account_number": "number",
        }

    def test_composite_identifier_relationship_flattened(self) -> None:
        target = EntityMetadata("app.Shipment")
        target.map_field("seq")
        target.map_many_to_one(
            {
                "field_name": "order",
                "target_type": "app.Order",
                "join_columns": [{"name": "order_region"}, {"name": "order_no"}],
            }
        )
        target.set_identifier(["order", "seq"])
        assert list(mapped_identifier_columns("shipment", target)) == [
            "shipment_order_region",
            "shipment_order_no",
            "shipment_seq",
        ]

    def test_relationship_without_join_columns_fails(self) -> None:
        target = EntityMetadata("app.Profile")
        target.map_field("kind")
        target.map_one_to_one({"field_name": "user", "target_type": "app.User", "mapped_by": "profile"})
        target.set_identifier(["user", "kind"])
        with pytest.raises(UnsupportedIdentifierError, match="no join columns"):
            mapped_identifier_columns("profile", target)

    def test_deep_nesting_fails_when_nested_target_loaded(self, make_session) -> None:
        session = make_session(
            {
                "app.Customer": {"identifier": ["id"], "fields": {"id": None}},
                "app.Account": {
                    "identifier": ["customer", "number"],
                    "fields": {"number": None},
                    "relationships": [
                        {"kind": "many_to_one", "field_name": "customer", "target_type": "app.Customer"}
                    ],
                },
            }
        )
        session.get_metadata("app.Account")

        ledger = EntityMetadata("app.Ledger")
        ledger.map_field("year")
        ledger.map_many_to_one(
            {
                "field_name": "account",
                "target_type": "app.Account",
                "join_columns": [{"name": "account_customer_id"}, {"name": "account_number"}],
            }
        )
        ledger.set_identifier(["account", "year"])

        with pytest.raises(UnsupportedIdentifierError, match="app.Ledger.account"):
            mapped_identifier_columns("ledger", ledger, session)
        # Without a session the nested identifier is not inspected.
        assert "ledger_year" in mapped_identifier_columns("ledger", ledger)

    def test_nested_target_not_loaded_is_not_inspected(self, make_session) -> None:
        session: Any = make_session({})
        assert mapped_identifier_columns("account", _account(), session) == {
            "account_customer_id": "customer_id",
            "account_number": "number",
        }


class TestJoinColumnMappings:
    def test_mappings(self) -> None:
        assert join_column_mappings({"owner_id1": "id1", "owner_id2": "id2"}) == [
            {"name": "owner_id1", "referenced_column_name": "id1"},
            {"name": "owner_id2", "referenced_column_name": "id2"},
        ]
