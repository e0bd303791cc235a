"""Join-column synthesis for composite identifiers.

A relationship to a type with a composite identifier needs one join column
per identifier column. For relationship field ``owner`` and target
identifier ``(id1, id2)`` the columns are ``owner_id1 -> id1`` and
``owner_id2 -> id2``. An identifier component that is itself a relationship
contributes the local join columns of that relationship instead.
"""

from __future__ import annotations

from retarget.core.exceptions import UnsupportedIdentifierError
from retarget.mapping.protocol import MetadataHandle, SessionHandle


def mapped_identifier_columns(
    field_name: str,
    target: MetadataHandle,
    session: SessionHandle | None = None,
) -> dict[str, str]:
    """Return synthesized join column name -> referenced column name.

    Identifier relationships are flattened one level. When *session* is
    given, a nested relationship whose own target is loaded is checked for
    a second level of identifier relationships.

    Raises:
        UnsupportedIdentifierError: If an identifier relationship has no join
            columns to flatten, or nests another identifier relationship.
    """
    columns: dict[str, str] = {}
    for component in target.get_identifier_components():
        if not target.is_relationship_component(component):
            columns[f"{field_name}_{component}"] = component
            continue

        nested = target.get_relationship_definition(component)
        if not nested.join_column_field_names:
            raise UnsupportedIdentifierError(
                target.name, component, "identifier relationship has no join columns"
            )
        _reject_deep_nesting(target.name, component, nested.target_type, session)
        for column_name in nested.join_column_field_names.values():
            columns[f"{field_name}_{column_name}"] = column_name
    return columns


def _reject_deep_nesting(
    target_name: str, component: str, nested_target: str, session: SessionHandle | None
) -> None:
    if session is None or not session.metadata_factory.has_metadata_for(nested_target):
        return
    nested_metadata = session.get_metadata(nested_target)
    for nested_component in nested_metadata.get_identifier_components():
        if nested_metadata.is_relationship_component(nested_component):
            raise UnsupportedIdentifierError(
                target_name,
                component,
                f"identifier of '{nested_target}' is itself keyed by relationship "
                f"'{nested_component}'",
            )


def join_column_mappings(columns: dict[str, str]) -> list[dict[str, str]]:
    """Convert synthesized columns to join-column mappings."""
    return [
        {"name": name, "referenced_column_name": referenced}
        for name, referenced in columns.items()
    ]
