"""Codec layer: per-kind encoders, decoders, and the codec registry."""

from vpacktime.codecs.decoders import bind_decoders
from vpacktime.codecs.encoders import ENCODERS
from vpacktime.codecs.registry import Codec, CodecRegistry

__all__ = ["ENCODERS", "Codec", "CodecRegistry", "bind_decoders"]
