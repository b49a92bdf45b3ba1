"""Temporal decoders: canonical strings plus the legacy numeric form.

Decode precedence for every kind:
  1. String slice: canonical pattern, then the ISO-8601 fallback.
  2. Number slice: signed 64-bit epoch milliseconds, projected with the
     default zone supplied at construction time (never read from the host
     during a decode).

Any other slice representation is a TypeMismatchError. Zone ids have no
epoch form, so a numeric zone id is a TypeMismatchError too.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from functools import partial

from vpacktime.binary import Decoder, ValueSlice, describe
from vpacktime.domain.errors import ParseError, RangeError, TypeMismatchError
from vpacktime.domain.formats import PATTERNS, parse_text
from vpacktime.domain.kinds import TemporalKind
from vpacktime.domain.zones import parse_zone_id

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1


# ---------------------------------------------------------------------------
# Legacy epoch-millisecond form
# ---------------------------------------------------------------------------


def instant_from_epoch_millis(millis: int) -> datetime:
    """Return the UTC instant *millis* milliseconds after the epoch.

    Raises:
        RangeError: If *millis* is not a signed 64-bit value, or the instant
            falls outside the years ``datetime`` can hold.
    """
    if not LONG_MIN <= millis <= LONG_MAX:
        msg = f"Epoch milliseconds {millis} exceed the signed 64-bit range"
        raise RangeError(msg)
    try:
        return EPOCH + timedelta(milliseconds=millis)
    except OverflowError as exc:
        msg = f"Epoch milliseconds {millis} are outside the representable calendar range"
        raise RangeError(msg) from exc


def _in_zone(instant: datetime, zone: tzinfo) -> datetime:
    try:
        return instant.astimezone(zone)
    except OverflowError as exc:
        msg = f"{instant.isoformat()} cannot be projected into {zone}"
        raise RangeError(msg) from exc


def _read(slice_: ValueSlice, kind: TemporalKind) -> str | int:
    """Return the slice's string, or its epoch milliseconds."""
    if slice_.is_string():
        return slice_.get_as_string()
    if slice_.is_number():
        try:
            millis = slice_.get_as_long()
        except (OverflowError, ValueError) as exc:
            msg = f"Numeric {kind} value is not an exact count of milliseconds"
            raise RangeError(msg) from exc
        logger.debug("Decoding %s from legacy epoch milliseconds", kind)
        return millis
    raise TypeMismatchError(kind, describe(slice_))


# ---------------------------------------------------------------------------
# String parsers
# ---------------------------------------------------------------------------


def parse_instant(text: str) -> datetime:
    parsed = parse_text(TemporalKind.INSTANT, text)
    return _in_zone(parsed.local.replace(tzinfo=parsed.offset), timezone.utc)


def parse_local_date(text: str) -> date:
    return parse_text(TemporalKind.LOCAL_DATE, text).local


def parse_local_date_time(text: str) -> datetime:
    return parse_text(TemporalKind.LOCAL_DATE_TIME, text).local


def parse_offset_date_time(text: str) -> datetime:
    parsed = parse_text(TemporalKind.OFFSET_DATE_TIME, text)
    return parsed.local.replace(tzinfo=parsed.offset)


def parse_zoned_date_time(text: str) -> datetime:
    """Parse a zoned value; the offset fixes the instant, the zone its display.

    Text without a bracketed zone keeps its offset as the zone.
    """
    parsed = parse_text(TemporalKind.ZONED_DATE_TIME, text)
    fixed = parsed.local.replace(tzinfo=parsed.offset)
    if parsed.zone is None:
        return fixed
    try:
        zone = parse_zone_id(parsed.zone)
    except ParseError as exc:
        raise ParseError(text, PATTERNS[TemporalKind.ZONED_DATE_TIME], reason=str(exc)) from exc
    return _in_zone(fixed, zone)


# ---------------------------------------------------------------------------
# Decoders
# ---------------------------------------------------------------------------


def decode_instant(slice_: ValueSlice) -> datetime:
    raw = _read(slice_, TemporalKind.INSTANT)
    if isinstance(raw, str):
        return parse_instant(raw)
    return instant_from_epoch_millis(raw)


def decode_local_date(slice_: ValueSlice, *, default_zone: tzinfo) -> date:
    raw = _read(slice_, TemporalKind.LOCAL_DATE)
    if isinstance(raw, str):
        return parse_local_date(raw)
    return _in_zone(instant_from_epoch_millis(raw), default_zone).date()


def decode_local_date_time(slice_: ValueSlice, *, default_zone: tzinfo) -> datetime:
    raw = _read(slice_, TemporalKind.LOCAL_DATE_TIME)
    if isinstance(raw, str):
        return parse_local_date_time(raw)
    return _in_zone(instant_from_epoch_millis(raw), default_zone).replace(tzinfo=None)


def decode_offset_date_time(slice_: ValueSlice, *, default_zone: tzinfo) -> datetime:
    raw = _read(slice_, TemporalKind.OFFSET_DATE_TIME)
    if isinstance(raw, str):
        return parse_offset_date_time(raw)
    # The offset the default zone has at that instant, frozen.
    local = _in_zone(instant_from_epoch_millis(raw), default_zone)
    offset = local.utcoffset()
    return local.replace(tzinfo=timezone(offset) if offset else timezone.utc)


def decode_zoned_date_time(slice_: ValueSlice, *, default_zone: tzinfo) -> datetime:
    raw = _read(slice_, TemporalKind.ZONED_DATE_TIME)
    if isinstance(raw, str):
        return parse_zoned_date_time(raw)
    return _in_zone(instant_from_epoch_millis(raw), default_zone)


def decode_zone_id(slice_: ValueSlice) -> tzinfo:
    if not slice_.is_string():
        raise TypeMismatchError(TemporalKind.ZONE_ID, describe(slice_), expected="string")
    return parse_zone_id(slice_.get_as_string())


def bind_decoders(default_zone: tzinfo) -> dict[TemporalKind, Decoder]:
    """Return one decoder per kind with *default_zone* bound where it is used."""
    return {
        TemporalKind.INSTANT: decode_instant,
        TemporalKind.LOCAL_DATE: partial(decode_local_date, default_zone=default_zone),
        TemporalKind.LOCAL_DATE_TIME: partial(decode_local_date_time, default_zone=default_zone),
        TemporalKind.OFFSET_DATE_TIME: partial(decode_offset_date_time, default_zone=default_zone),
        TemporalKind.ZONED_DATE_TIME: partial(decode_zoned_date_time, default_zone=default_zone),
        TemporalKind.ZONE_ID: decode_zone_id,
    }
