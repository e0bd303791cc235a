"""Recursive merge of relationship mappings.

Values are one of three shapes: mapping, sequence, or scalar. The merge
walks both sides together:

* mapping onto mapping: key by key, base-only keys kept, new keys added
* sequence onto sequence: position by position, base elements past the
  end of the override kept, extra override elements appended
* anything else: the override value replaces the base value

So ``[a, b, c]`` merged with ``[x]`` is ``[x, b, c]``; sequences are never
concatenated and never replaced wholesale.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def _is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def _is_sequence(value: Any) -> bool:
    """Check for a list-like value. Strings and bytes are scalars."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _copy(value: Any) -> Any:
    """Rebuild containers so the result never aliases an input."""
    if _is_mapping(value):
        return {key: _copy(item) for key, item in value.items()}
    if _is_sequence(value):
        return [_copy(item) for item in value]
    return value


def merge_value(base: Any, override: Any) -> Any:
    """Merge a single override value onto a base value."""
    if _is_mapping(base) and _is_mapping(override):
        return merge_recursive(base, override)
    if _is_sequence(base) and _is_sequence(override):
        return _merge_sequences(base, override)
    return _copy(override)


def _merge_sequences(base: Sequence[Any], override: Sequence[Any]) -> list[Any]:
    result = [_copy(item) for item in base]
    for index, item in enumerate(override):
        if index < len(result):
            result[index] = merge_value(result[index], item)
        else:
            result.append(_copy(item))
    return result


def merge_recursive(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *override* onto *base* and return a new mapping.

    Neither input is modified.

    Args:
        base: The original mapping.
        override: Values that take precedence over *base*.

    Returns:
        A fresh dict; nested tuples and lists come back as lists.
    """
    result = {key: _copy(value) for key, value in base.items()}
    for key, value in override.items():
        if key in result:
            result[key] = merge_value(result[key], value)
        else:
            result[key] = _copy(value)
    return result
