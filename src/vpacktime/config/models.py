"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, vpacktime.toml only contains
overrides. An empty file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from vpacktime.domain.zones import parse_zone_id


class TemporalConfig(BaseModel):
    """[temporal] section."""

    model_config = {"frozen": True}

    # Projection zone for legacy epoch-millisecond values; None = host zone.
    default_zone: str | None = None

    @field_validator("default_zone")
    @classmethod
    def _known_zone(cls, value: str | None) -> str | None:
        if value is not None:
            parse_zone_id(value)
        return value


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    discover: bool = True
    disabled: list[str] = Field(default_factory=list)
