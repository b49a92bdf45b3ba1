"""CodecRegistry: the closed kind -> encoder/decoder mapping.

Filled once at module-registration time, then only read. Lookups are by
:class:`TemporalKind`, chosen by the mapping framework when a field is
registered; values are never inspected to pick a codec.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from vpacktime.binary import Decoder, Encoder, ValueBuilder, ValueSlice
from vpacktime.domain.kinds import TemporalKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Codec:
    """The encoder/decoder pair registered for one kind."""

    kind: TemporalKind
    encoder: Encoder[Any]
    decoder: Decoder[Any]

    def encode(self, builder: ValueBuilder, value: Any) -> None:
        self.encoder(builder, value)

    def decode(self, slice_: ValueSlice) -> Any:
        return self.decoder(slice_)


class CodecRegistry:
    """Encoders and decoders keyed by temporal kind."""

    def __init__(self) -> None:
        self._encoders: dict[TemporalKind, Encoder[Any]] = {}
        self._decoders: dict[TemporalKind, Decoder[Any]] = {}

    def register_encoder(self, kind: TemporalKind | str, encoder: Encoder[Any]) -> None:
        """Register *encoder* for *kind*.

        Raises:
            ValueError: If *kind* is unknown or already has another encoder.
        """
        resolved = TemporalKind(kind)
        existing = self._encoders.get(resolved)
        if existing is not None and existing is not encoder:
            msg = f"An encoder for {resolved!s} is already registered"
            raise ValueError(msg)
        self._encoders[resolved] = encoder
        logger.debug("Registered encoder for %s", resolved)

    def register_decoder(self, kind: TemporalKind | str, decoder: Decoder[Any]) -> None:
        """Register *decoder* for *kind*.

        Raises:
            ValueError: If *kind* is unknown or already has another decoder.
        """
        resolved = TemporalKind(kind)
        existing = self._decoders.get(resolved)
        if existing is not None and existing is not decoder:
            msg = f"A decoder for {resolved!s} is already registered"
            raise ValueError(msg)
        self._decoders[resolved] = decoder
        logger.debug("Registered decoder for %s", resolved)

    def encoder_for(self, kind: TemporalKind | str) -> Encoder[Any]:
        """Raises KeyError if no encoder is registered for *kind*."""
        resolved = TemporalKind(kind)
        if resolved not in self._encoders:
            msg = f"No encoder registered for {resolved!s}"
            raise KeyError(msg)
        return self._encoders[resolved]

    def decoder_for(self, kind: TemporalKind | str) -> Decoder[Any]:
        """Raises KeyError if no decoder is registered for *kind*."""
        resolved = TemporalKind(kind)
        if resolved not in self._decoders:
            msg = f"No decoder registered for {resolved!s}"
            raise KeyError(msg)
        return self._decoders[resolved]

    def codec_for(self, kind: TemporalKind | str) -> Codec:
        """Resolve the pair for *kind*, typically once per registered field."""
        resolved = TemporalKind(kind)
        return Codec(resolved, self.encoder_for(resolved), self.decoder_for(resolved))

    def encode(self, kind: TemporalKind | str, builder: ValueBuilder, value: Any) -> None:
        self.encoder_for(kind)(builder, value)

    def decode(self, kind: TemporalKind | str, slice_: ValueSlice) -> Any:
        return self.decoder_for(kind)(slice_)

    @property
    def kinds(self) -> frozenset[TemporalKind]:
        """Kinds with both an encoder and a decoder."""
        return frozenset(self._encoders) & frozenset(self._decoders)

    @property
    def is_complete(self) -> bool:
        """Whether every temporal kind has a full codec pair."""
        return self.kinds == frozenset(TemporalKind)
