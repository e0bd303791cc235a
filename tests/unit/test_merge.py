"""Unit tests for the recursive positional merge."""

from __future__ import annotations

from retarget.core.merge import merge_recursive, merge_value


class TestMergeRecursive:
    def test_scalar_override_wins(self) -> None:
        assert merge_recursive({"a": 1}, {"a": 2}) == {"a": 2}

    def test_base_only_keys_kept(self) -> None:
        assert merge_recursive({"a": 1, "b": 2}, {"a": 3}) == {"a": 3, "b": 2}

    def test_override_only_keys_added(self) -> None:
        assert merge_recursive({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}

    def test_sequence_positional_override(self) -> None:
        result = merge_recursive({"seq": ["a", "b", "c"]}, {"seq": ["x"]})
        assert result["seq"] == ["x", "b", "c"]

    def test_longer_override_sequence_extends(self) -> None:
        result = merge_recursive({"seq": ["a"]}, {"seq": ["x", "y", "z"]})
        assert result["seq"] == ["x", "y", "z"]

    def test_empty_override_sequence_keeps_base(self) -> None:
        result = merge_recursive({"seq": ["a", "b"]}, {"seq": []})
        assert result["seq"] == ["a", "b"]

    def test_nested_mappings_merge_key_by_key(self) -> None:
        base = {"join_table": {"name": "t", "schema": "s"}}
        result = merge_recursive(base, {"join_table": {"name": "u"}})
        assert result == {"join_table": {"name": "u", "schema": "s"}}

    def test_sequence_of_mappings_merges_elements(self) -> None:
        base = {
            "join_columns": [
                {"name": "owner_id", "referenced_column_name": "id", "nullable": False},
                {"name": "extra", "referenced_column_name": "code"},
            ]
        }
        override = {"join_columns": [{"name": "owner_key"}]}
        result = merge_recursive(base, override)
        assert result["join_columns"] == [
            {"name": "owner_key", "referenced_column_name": "id", "nullable": False},
            {"name": "extra", "referenced_column_name": "code"},
        ]

    def test_scalar_replaces_container(self) -> None:
        assert merge_recursive({"a": [1, 2]}, {"a": None}) == {"a": None}

    def test_container_replaces_scalar(self) -> None:
        assert merge_recursive({"a": None}, {"a": [1, 2]}) == {"a": [1, 2]}

    def test_strings_are_scalars(self) -> None:
        assert merge_recursive({"a": "abc"}, {"a": "x"}) == {"a": "x"}

    def test_tuples_merge_as_sequences(self) -> None:
        assert merge_recursive({"a": ("p", "q")}, {"a": ["x"]}) == {"a": ["x", "q"]}

    def test_inputs_not_mutated(self) -> None:
        base = {"seq": [{"k": 1}], "m": {"a": 1}}
        override = {"seq": [{"k": 2}], "m": {"b": 2}}
        merge_recursive(base, override)
        assert base == {"seq": [{"k": 1}], "m": {"a": 1}}
        assert override == {"seq": [{"k": 2}], "m": {"b": 2}}

    def test_result_does_not_alias_inputs(self) -> None:
        base = {"seq": [1, 2]}
        result = merge_recursive(base, {})
        result["seq"].append(3)
        assert base["seq"] == [1, 2]


class TestMergeValue:
    def test_scalars(self) -> None:
        assert merge_value(1, 2) == 2

    def test_mismatched_shapes(self) -> None:
        assert merge_value({"a": 1}, ["x"]) == ["x"]
