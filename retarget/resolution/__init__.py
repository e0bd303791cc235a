"""Resolution layer - rewrite relationships that target abstract types."""

from __future__ import annotations

from retarget.resolution.identifiers import mapped_identifier_columns
from retarget.resolution.listener import ResolveTargetListener

__all__ = [
    "ResolveTargetListener",
    "mapped_identifier_columns",
]
