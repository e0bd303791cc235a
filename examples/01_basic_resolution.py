"""
Example 01: Basic Target Resolution

This example demonstrates declaring a relationship against an interface and
resolving it to a concrete type when the metadata loads.
"""

from retarget import DictMappingDriver, ResolveTargetListener, Session, TargetRegistry


def main():
    # The blog module only knows about an author contract
    declarations = {
        "blog.Post": {
            "identifier": ["id"],
            "fields": {"id": None, "title": None},
            "relationships": [
                {
                    "kind": "many_to_one",
                    "field_name": "author",
                    "target_type": "blog.contracts.AuthorInterface",
                },
            ],
        },
        "app.User": {
            "identifier": ["id"],
            "fields": {"id": None, "email": None},
        },
    }

    # The application decides which type implements the contract
    registry = TargetRegistry()
    registry.register("\\blog.contracts.AuthorInterface", "app.User", {"fetch": "eager"})
    registry.freeze()

    session = Session.create(DictMappingDriver(declarations))
    ResolveTargetListener(registry).subscribe(session.event_manager)

    print("=== Target Resolution ===\n")

    post = session.get_metadata("blog.Post")
    author = post.relationships["author"]
    print(f"   Field:        {author.field_name}")
    print(f"   Target:       {author.target_type}")
    print(f"   Fetch:        {author.fetch.value}")
    print(f"   Join columns: {[c.name for c in author.join_columns]}\n")

    # The contract name can be used to look up the concrete metadata
    user = session.get_metadata("blog.contracts.AuthorInterface")
    print(f"   Contract resolves to: {user.name}")


if __name__ == "__main__":
    main()
