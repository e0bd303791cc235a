"""Resolve-target configuration.

ResolveTargetConfig is a Pydantic model for type-safe configuration of the
target registry, accepting either a full entry or a bare target name:

    {
        "resolve_target_entities": {
            "App\\Contract\\Customer": "App\\Entity\\Customer",
            "App\\Contract\\Invoice": {
                "target": "App\\Entity\\Invoice",
                "mapping": {"fetch": "eager"},
            },
        }
    }
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from retarget.core.exceptions import ConfigurationError


class TargetResolution(BaseModel):
    """One abstract type's resolution: concrete target plus overrides."""

    target: str
    mapping: dict[str, Any] = {}

    @field_validator("target")
    @classmethod
    def target_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("target must not be empty")
        return value


class ResolveTargetConfig(BaseModel):
    """Configuration for a TargetRegistry."""

    resolve_target_entities: dict[str, TargetResolution] = {}
    freeze: bool = False

    @field_validator("resolve_target_entities", mode="before")
    @classmethod
    def expand_shorthand(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {
            name: {"target": entry} if isinstance(entry, str) else entry
            for name, entry in value.items()
        }


def load_config(data: dict[str, Any]) -> ResolveTargetConfig:
    """Validate a raw configuration mapping.

    Raises:
        ConfigurationError: If the payload does not match ResolveTargetConfig.
    """
    try:
        return ResolveTargetConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid resolve-target configuration: {e}") from e
