"""Binary value builder/slice contracts consumed by the codecs.

The container format itself lives in the host serializer. Codecs only need
a builder that accepts a single string and a slice that exposes the scalar
it points at:

    def encode_x(builder: ValueBuilder, value: ValueType) -> None:
        ...

    def decode_x(slice_: ValueSlice, ...config params...) -> ValueType:
        ...

:class:`ScalarBuilder` and :class:`ScalarSlice` are in-memory stand-ins for
a single scalar value, used to drive codecs outside a container.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol, TypeVar

T_co = TypeVar("T_co", covariant=True)
T_contra = TypeVar("T_contra", contravariant=True)


class ValueType(StrEnum):
    """Scalar representations a slice can hold."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


class ValueBuilder(Protocol):
    """Write-side cursor positioned on one scalar value."""

    def add_string(self, value: str) -> None: ...


class ValueSlice(Protocol):
    """Read-side view over one encoded value."""

    def is_string(self) -> bool: ...

    def get_as_string(self) -> str: ...

    def is_number(self) -> bool: ...

    def get_as_long(self) -> int:
        """Raises ValueError when the number is not an exact integer."""


class Encoder(Protocol[T_contra]):
    def __call__(self, builder: ValueBuilder, value: T_contra, /) -> None: ...


class Decoder(Protocol[T_co]):
    def __call__(self, slice_: ValueSlice, /) -> T_co: ...


def describe(slice_: ValueSlice) -> str:
    """Best-effort name of the representation behind *slice_*."""
    value_type = getattr(slice_, "value_type", None)
    if value_type is not None:
        return str(value_type)
    return type(slice_).__name__


@dataclass(frozen=True, slots=True)
class ScalarSlice:
    """A slice over one in-memory Python value.

    ``bool`` is never a number here, even though it subclasses ``int``.
    """

    value: Any

    @property
    def value_type(self) -> ValueType:
        if self.value is None:
            return ValueType.NULL
        if isinstance(self.value, bool):
            return ValueType.BOOL
        if isinstance(self.value, str):
            return ValueType.STRING
        if isinstance(self.value, (int, float)):
            return ValueType.NUMBER
        if isinstance(self.value, (list, tuple)):
            return ValueType.ARRAY
        if isinstance(self.value, dict):
            return ValueType.OBJECT
        msg = f"Unsupported scalar {type(self.value).__name__}"
        raise TypeError(msg)

    def is_string(self) -> bool:
        return self.value_type is ValueType.STRING

    def get_as_string(self) -> str:
        if not self.is_string():
            msg = f"Slice holds a {self.value_type}, not a string"
            raise TypeError(msg)
        return self.value

    def is_number(self) -> bool:
        return self.value_type is ValueType.NUMBER

    def get_as_long(self) -> int:
        """Return the number as an integer.

        Doubles are accepted only when they hold an exact integer value.

        Raises:
            TypeError: If the slice is not a number.
            ValueError: For fractional, infinite, or NaN doubles.
        """
        if not self.is_number():
            msg = f"Slice holds a {self.value_type}, not a number"
            raise TypeError(msg)
        if isinstance(self.value, float) and not self.value.is_integer():
            msg = f"Double {self.value!r} has no exact integer value"
            raise ValueError(msg)
        return int(self.value)


class ScalarBuilder:
    """Collects scalar writes; ``slice()`` exposes the single value written."""

    def __init__(self) -> None:
        self._values: list[Any] = []

    @property
    def values(self) -> list[Any]:
        """Every value written so far, in order."""
        return list(self._values)

    def add_string(self, value: str) -> None:
        self._values.append(str(value))

    def add_number(self, value: int | float) -> None:
        if isinstance(value, bool):
            msg = "Booleans are not numbers; use add_boolean()"
            raise TypeError(msg)
        self._values.append(value)

    def add_boolean(self, value: bool) -> None:
        self._values.append(bool(value))

    def add_null(self) -> None:
        self._values.append(None)

    def slice(self) -> ScalarSlice:
        """Return a slice over the one value written.

        Raises:
            ValueError: If zero or several values were written.
        """
        if len(self._values) != 1:
            msg = f"Expected exactly one value, builder holds {len(self._values)}"
            raise ValueError(msg)
        return ScalarSlice(self._values[0])
