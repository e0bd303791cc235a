"""Target registry - maps abstract type names to concrete targets.

Populate the registry during configuration, then hand it to a
ResolveTargetListener. Lookups never modify it:

    registry = TargetRegistry()
    registry.register("App\\Contract\\Customer", "App\\Entity\\Customer")
    registry.lookup("\\App\\Contract\\Customer").concrete_type
    # -> "App\\Entity\\Customer"
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from retarget.core.exceptions import RegistryFrozenError, TargetNotRegisteredError
from retarget.core.names import normalize_type_name

if TYPE_CHECKING:
    from collections.abc import Mapping

    from retarget.core.config import ResolveTargetConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionRecord:
    """Resolution of one abstract type.

    ``overrides`` is a partial relationship mapping merged onto every
    relationship that targets the abstract type. It always carries
    ``target_type``.
    """

    concrete_type: str
    overrides: dict[str, Any] = field(default_factory=dict)


class TargetRegistry:
    """Registry of abstract type -> concrete type resolutions.

    The registry has two phases: registration during configuration, then
    read-only lookups while metadata loads. ``freeze()`` marks the end of
    the first phase explicitly; an unfrozen registry accepts registrations
    at any time.
    """

    def __init__(self) -> None:
        self._records: dict[str, ResolutionRecord] = {}
        self._frozen = False

    @classmethod
    def from_config(cls, config: ResolveTargetConfig) -> TargetRegistry:
        """Create a registry from a validated ResolveTargetConfig."""
        registry = cls()
        for abstract_type, resolution in config.resolve_target_entities.items():
            registry.register(abstract_type, resolution.target, resolution.mapping)
        if config.freeze:
            registry.freeze()
        return registry

    def register(
        self,
        abstract_type: str | type,
        concrete_type: str | type,
        overrides: Mapping[str, Any] | None = None,
    ) -> None:
        """Register the concrete type that resolves *abstract_type*.

        Re-registering an abstract type replaces the earlier record.

        Args:
            abstract_type: Interface or placeholder type used as a target.
            concrete_type: Type that relationships should point to instead.
            overrides: Partial relationship mapping merged onto every
                remapped relationship.

        Raises:
            RegistryFrozenError: If ``freeze()`` was called.
        """
        key = normalize_type_name(abstract_type)
        if self._frozen:
            raise RegistryFrozenError(key)

        target = normalize_type_name(concrete_type)
        mapping = copy.deepcopy(dict(overrides or {}))
        mapping["target_type"] = target

        previous = self._records.get(key)
        if previous is not None:
            logger.info(
                "Replacing target for %s: %s -> %s", key, previous.concrete_type, target
            )
        else:
            logger.debug("Registered target for %s: %s", key, target)

        self._records[key] = ResolutionRecord(concrete_type=target, overrides=mapping)

    def lookup(self, target_type: str | type) -> ResolutionRecord | None:
        """Return the record for *target_type*, or None if unregistered."""
        return self._records.get(normalize_type_name(target_type))

    def get(self, target_type: str | type) -> ResolutionRecord:
        """Return the record for *target_type*.

        Raises:
            TargetNotRegisteredError: If no record exists.
        """
        record = self.lookup(target_type)
        if record is None:
            raise TargetNotRegisteredError(normalize_type_name(target_type))
        return record

    def has(self, target_type: str | type) -> bool:
        """Check if an abstract type is registered."""
        return self.lookup(target_type) is not None

    def items(self) -> list[tuple[str, ResolutionRecord]]:
        """Registered (abstract type, record) pairs in registration order."""
        return list(self._records.items())

    def freeze(self) -> None:
        """End the configuration phase."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def abstract_types(self) -> list[str]:
        """List all registered abstract types, sorted alphabetically."""
        return sorted(self._records.keys())

    def __contains__(self, target_type: object) -> bool:
        if not isinstance(target_type, (str, type)):
            return False
        return self.has(target_type)

    def __len__(self) -> int:
        """Number of registered abstract types."""
        return len(self._records)
