"""Built-in temporal module: codecs for the six temporal kinds.

Registers, for every :class:`TemporalKind`, the canonical encoder and the
decoder with the configured default zone bound in.
"""

from __future__ import annotations

import logging
from datetime import tzinfo

import pluggy

from vpacktime.codecs.decoders import bind_decoders
from vpacktime.codecs.encoders import ENCODERS
from vpacktime.codecs.registry import CodecRegistry
from vpacktime.domain.kinds import TemporalKind

hookimpl = pluggy.HookimplMarker("vpacktime")

logger = logging.getLogger(__name__)


class TemporalModule:
    """Codec module for instants, local/offset/zoned date-times and zone ids."""

    @hookimpl
    def register_codecs(self, registry: CodecRegistry, default_zone: tzinfo) -> None:
        decoders = bind_decoders(default_zone)
        for kind in TemporalKind:
            registry.register_encoder(kind, ENCODERS[kind])
            registry.register_decoder(kind, decoders[kind])
        logger.debug("Temporal codecs registered (default zone %s)", default_zone)
