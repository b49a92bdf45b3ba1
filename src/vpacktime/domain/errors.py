"""Error taxonomy for temporal codecs.

Every error is raised synchronously to the caller. Each class also extends
the matching builtin so callers catching ``ValueError``/``TypeError``/
``OverflowError`` keep working.
"""

from __future__ import annotations


class TemporalCodecError(Exception):
    """Base class for all codec failures."""


class ParseError(TemporalCodecError, ValueError):
    """Text matches none of the patterns accepted for a kind.

    Attributes:
        text: The offending text.
        pattern: The canonical pattern that was expected.
    """

    def __init__(self, text: str, pattern: str, reason: str | None = None) -> None:
        self.text = text
        self.pattern = pattern
        msg = f"Cannot parse {text!r}: expected {pattern}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class TypeMismatchError(TemporalCodecError, TypeError):
    """The binary value has the wrong underlying representation."""

    def __init__(self, kind: str, value_type: str, expected: str = "string or number") -> None:
        self.kind = kind
        self.value_type = value_type
        super().__init__(f"Cannot decode {kind} from a {value_type} value: expected {expected}")


class RangeError(TemporalCodecError, OverflowError):
    """A numeric or calendar value is outside the representable range."""


class FormatError(TemporalCodecError, ValueError):
    """A temporal value cannot be rendered to its canonical form."""
