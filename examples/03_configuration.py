"""
Example 03: Configuration

This example demonstrates building the target registry from a configuration
mapping, e.g. one loaded from a settings file.
"""

import json

from retarget import (
    ConfigurationError,
    DictMappingDriver,
    ResolveTargetListener,
    Session,
    TargetRegistry,
    load_config,
)

SETTINGS = """
{
    "resolve_target_entities": {
        "cms.contracts.Media": "app.Image",
        "cms.contracts.Editor": {
            "target": "app.Staff",
            "mapping": {"cascade": ["persist"], "join_columns": [{"name": "editor_ref"}]}
        }
    },
    "freeze": true
}
"""


def main():
    config = load_config(json.loads(SETTINGS))
    registry = TargetRegistry.from_config(config)

    print("=== Registry From Configuration ===\n")
    for abstract_type in registry.abstract_types:
        record = registry.get(abstract_type)
        print(f"   {abstract_type} -> {record.concrete_type}")
    print(f"   Frozen: {registry.frozen}\n")

    session = Session.create(
        DictMappingDriver(
            {
                "cms.Page": {
                    "identifier": ["id"],
                    "fields": {"id": None},
                    "relationships": [
                        {"kind": "many_to_many", "field_name": "media", "target_type": "cms.contracts.Media"},
                        {"kind": "many_to_one", "field_name": "editor", "target_type": "cms.contracts.Editor"},
                    ],
                }
            }
        )
    )
    ResolveTargetListener(registry).subscribe(session.event_manager)

    page = session.get_metadata("cms.Page")
    media = page.relationships["media"]
    editor = page.relationships["editor"]
    print(f"   media  -> {media.target_type} via {media.join_table}")
    print(f"   editor -> {editor.target_type} via {[c.name for c in editor.join_columns]}\n")

    # Invalid configuration is reported with ConfigurationError
    try:
        load_config({"resolve_target_entities": {"cms.contracts.Media": {"mapping": {}}}})
    except ConfigurationError as e:
        print(f"   Rejected: {type(e).__name__}")


if __name__ == "__main__":
    main()
