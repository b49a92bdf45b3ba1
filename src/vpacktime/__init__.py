"""Temporal value codecs for VelocyPack-style binary serializers."""

from vpacktime.binary import ScalarBuilder, ScalarSlice, ValueBuilder, ValueSlice
from vpacktime.codecs.registry import Codec, CodecRegistry
from vpacktime.domain.errors import (
    FormatError,
    ParseError,
    RangeError,
    TemporalCodecError,
    TypeMismatchError,
)
from vpacktime.domain.kinds import TemporalKind
from vpacktime.module import create_registry

__version__ = "0.1.0"

__all__ = [
    "Codec",
    "CodecRegistry",
    "FormatError",
    "ParseError",
    "RangeError",
    "ScalarBuilder",
    "ScalarSlice",
    "TemporalCodecError",
    "TemporalKind",
    "TypeMismatchError",
    "ValueBuilder",
    "ValueSlice",
    "create_registry",
]
