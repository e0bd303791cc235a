"""Type-name normalization.

Type names are compared as plain strings. Leading namespace separators are
not significant, so these all name the same type:

    \\App\\Contract\\Customer  -> "App\\Contract\\Customer"
    .app.contracts.Customer   -> "app.contracts.Customer"
    app.contracts.Customer    -> "app.contracts.Customer"
"""

from __future__ import annotations

import re

# Both the backslash style and Python's dotted style are accepted.
NAMESPACE_SEPARATORS = "\\."

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_type_name(type_name: str | type) -> str:
    """Return the canonical string form of a type name.

    Classes are converted to ``module.QualName``. Surrounding whitespace and
    leading namespace separators are stripped; inner separators are kept.
    """
    if isinstance(type_name, type):
        type_name = f"{type_name.__module__}.{type_name.__qualname__}"
    return type_name.strip().lstrip(NAMESPACE_SEPARATORS)


def short_name(type_name: str) -> str:
    """Return the last segment of a namespaced type name."""
    normalized = normalize_type_name(type_name)
    for separator in NAMESPACE_SEPARATORS:
        normalized = normalized.rsplit(separator, 1)[-1]
    return normalized


def snake_case(type_name: str) -> str:
    """Convert the short name of a type to snake_case ("LineItem" -> "line_item")."""
    return _CAMEL_BOUNDARY.sub("_", short_name(type_name)).lower()
