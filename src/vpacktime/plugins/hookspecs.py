"""Pluggy hook specifications for vpacktime codec modules.

A module contributes codecs by implementing ``register_codecs``. The hook
runs once per registry, at registration time.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from vpacktime.codecs.registry import CodecRegistry

hookspec = pluggy.HookspecMarker("vpacktime")


class VpacktimeHookSpec:
    """Hook specifications for the vpacktime module system."""

    @hookspec
    def register_codecs(self, registry: CodecRegistry, default_zone: tzinfo) -> None:
        """Register encoders and decoders on *registry*.

        *default_zone* is the projection zone for legacy numeric values.
        """
