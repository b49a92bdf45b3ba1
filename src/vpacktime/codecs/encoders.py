"""Temporal encoders: one canonical string per value.

Each ``format_*`` function renders a value; each ``encode_*`` function writes
that rendering into a builder and nothing else. The zone used is always the
one carried by the value, never the host zone.

INVARIANT: Encoders only raise FormatError, and only for values that cannot
be represented (naive where aware is required, sub-second offsets, ...).
"""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo

from vpacktime.binary import Encoder, ValueBuilder
from vpacktime.domain.errors import FormatError
from vpacktime.domain.formats import format_date, format_offset, format_time
from vpacktime.domain.kinds import TemporalKind
from vpacktime.domain.zones import zone_id


def _require_datetime(value: object, kind: TemporalKind, *, aware: bool) -> datetime:
    if not isinstance(value, datetime):
        msg = f"{kind} expects a datetime, got {type(value).__name__}"
        raise FormatError(msg)
    if (value.utcoffset() is not None) != aware:
        state = "timezone-aware" if aware else "naive"
        msg = f"{kind} expects a {state} datetime, got {value!r}"
        raise FormatError(msg)
    return value


def format_instant(value: datetime) -> str:
    """Render ``yyyy-MM-dd'T'HH:mm:ss.SSS'Z'`` in UTC."""
    value = _require_datetime(value, TemporalKind.INSTANT, aware=True)
    try:
        utc = value.astimezone(timezone.utc)
    except OverflowError as exc:
        msg = f"{value!r} is outside the representable UTC range"
        raise FormatError(msg) from exc
    return f"{format_date(utc)}T{format_time(utc)}Z"


def format_local_date(value: date) -> str:
    # A datetime is a date subclass but belongs to another kind.
    if not isinstance(value, date) or isinstance(value, datetime):
        msg = f"{TemporalKind.LOCAL_DATE} expects a date, got {type(value).__name__}"
        raise FormatError(msg)
    return format_date(value)


def format_local_date_time(value: datetime) -> str:
    value = _require_datetime(value, TemporalKind.LOCAL_DATE_TIME, aware=False)
    return f"{format_date(value)}T{format_time(value)}"


def format_offset_date_time(value: datetime) -> str:
    value = _require_datetime(value, TemporalKind.OFFSET_DATE_TIME, aware=True)
    return f"{format_date(value)}T{format_time(value)}{format_offset(value.utcoffset())}"


def format_zoned_date_time(value: datetime) -> str:
    """Render the resolved offset followed by ``[zone-id]``.

    Wall times inside a DST gap do not exist; they are moved forward by the
    gap length (02:30 becomes 03:30) before rendering.
    """
    value = _require_datetime(value, TemporalKind.ZONED_DATE_TIME, aware=True)
    try:
        value = value.astimezone(timezone.utc).astimezone(value.tzinfo)
    except OverflowError as exc:
        msg = f"{value!r} is outside the representable UTC range"
        raise FormatError(msg) from exc
    return f"{format_offset_date_time(value)}[{zone_id(value.tzinfo)}]"


def format_zone_id(value: tzinfo) -> str:
    if not isinstance(value, tzinfo):
        msg = f"{TemporalKind.ZONE_ID} expects a tzinfo, got {type(value).__name__}"
        raise FormatError(msg)
    return zone_id(value)


def encode_instant(builder: ValueBuilder, value: datetime) -> None:
    builder.add_string(format_instant(value))


def encode_local_date(builder: ValueBuilder, value: date) -> None:
    builder.add_string(format_local_date(value))


def encode_local_date_time(builder: ValueBuilder, value: datetime) -> None:
    builder.add_string(format_local_date_time(value))


def encode_offset_date_time(builder: ValueBuilder, value: datetime) -> None:
    builder.add_string(format_offset_date_time(value))


def encode_zoned_date_time(builder: ValueBuilder, value: datetime) -> None:
    builder.add_string(format_zoned_date_time(value))


def encode_zone_id(builder: ValueBuilder, value: tzinfo) -> None:
    builder.add_string(format_zone_id(value))


ENCODERS: dict[TemporalKind, Encoder] = {
    TemporalKind.INSTANT: encode_instant,
    TemporalKind.LOCAL_DATE: encode_local_date,
    TemporalKind.LOCAL_DATE_TIME: encode_local_date_time,
    TemporalKind.OFFSET_DATE_TIME: encode_offset_date_time,
    TemporalKind.ZONED_DATE_TIME: encode_zoned_date_time,
    TemporalKind.ZONE_ID: encode_zone_id,
}
