"""
Example 02: Composite Identifiers

This example demonstrates join-column synthesis when the concrete target is
keyed by more than one column.
"""

from retarget import DictMappingDriver, ResolveTargetListener, Session, TargetRegistry


def main():
    declarations = {
        # Loaded first, so its identifier is known when Order is remapped
        "app.Customer": {
            "identifier": ["tenant", "number"],
            "fields": {"tenant": None, "number": None, "name": None},
        },
        "app.Account": {
            "identifier": ["customer", "code"],
            "fields": {"code": None},
            "relationships": [
                {
                    "kind": "many_to_one",
                    "field_name": "customer",
                    "target_type": "shop.contracts.Customer",
                },
            ],
        },
        "shop.Order": {
            "identifier": ["id"],
            "fields": {"id": None},
            "relationships": [
                {
                    "kind": "many_to_one",
                    "field_name": "buyer",
                    "target_type": "shop.contracts.Customer",
                },
                {
                    "kind": "many_to_one",
                    "field_name": "account",
                    "target_type": "shop.contracts.Account",
                },
            ],
        },
    }

    registry = TargetRegistry()
    registry.register("shop.contracts.Customer", "app.Customer")
    registry.register("shop.contracts.Account", "app.Account")

    session = Session.create(DictMappingDriver(declarations))
    ResolveTargetListener(registry).subscribe(session.event_manager)
    session.metadata_factory.get_all_metadata()

    print("=== Composite Identifier Join Columns ===\n")

    order = session.get_metadata("shop.Order")
    for name in ("buyer", "account"):
        relationship = order.relationships[name]
        print(f"{name} -> {relationship.target_type}")
        for column in relationship.join_columns:
            print(f"   {column.name} references {column.referenced_column_name}")
        print()


if __name__ == "__main__":
    main()
