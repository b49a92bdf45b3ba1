"""Zone identifiers: rendering, parsing, and host default zone resolution.

Two zone shapes are supported:
- Region zones (``ZoneInfo``), identified by their IANA key.
- Fixed offsets (``datetime.timezone``), identified as ``Z`` or ``+HH:MM``.

The host zone is resolved with ``tzlocal``. A POSIX ``TZ`` rule such as
``CET-1CEST,M3.5.0,M10.5.0/3`` has no IANA key; it is loaded as a
``ZoneInfo`` whose only content is that rule, so DST still applies per
instant.
"""

from __future__ import annotations

import io
import logging
import os
import re
import struct
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import tzlocal

from vpacktime.domain.errors import FormatError, ParseError
from vpacktime.domain.formats import PATTERNS, format_offset, parse_offset
from vpacktime.domain.kinds import TemporalKind

logger = logging.getLogger(__name__)

POSIX_RULE_PATTERN = "std offset[dst[offset][,start[/time],end[/time]]]"

# Standard-time abbreviation followed by its offset; zoneinfo checks the rest.
_POSIX_RULE = re.compile(r"(?:[A-Za-z]{3,}|<[A-Za-z0-9+-]{3,}>)[+-]?\d", re.ASCII)

# TZif v2 header counts: isutcnt, isstdcnt, leapcnt, timecnt, typecnt, charcnt.
_TZIF_HEADER = b"TZif2" + bytes(15) + struct.pack(">6l", 0, 0, 0, 0, 1, 4)
# One UTC local time type, no transitions.
_TZIF_BLOCK = struct.pack(">lBB", 0, 0, 0) + b"UTC\0"


def zone_id(zone: tzinfo) -> str:
    """Return the identifier a zone reports for itself.

    Raises:
        FormatError: If the zone has no stable identifier (a ``ZoneInfo``
            loaded from a file without a key, or a foreign tzinfo class).
    """
    if isinstance(zone, ZoneInfo):
        if zone.key is None:
            msg = "ZoneInfo loaded without a key has no zone id"
            raise FormatError(msg)
        return zone.key
    if isinstance(zone, timezone):
        return format_offset(zone.utcoffset(None))
    msg = f"Unsupported tzinfo implementation {type(zone).__name__}"
    raise FormatError(msg)


def parse_zone_id(text: str) -> tzinfo:
    """Parse an offset id (``Z``, ``+HH:MM``) or an IANA zone key.

    Raises:
        ParseError: If *text* is neither a valid offset nor a known zone.
    """
    offset = parse_offset(text)
    if offset is not None:
        return offset
    try:
        return ZoneInfo(text)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise ParseError(text, PATTERNS[TemporalKind.ZONE_ID], reason="unknown zone") from exc


def posix_zone(rule: str) -> ZoneInfo:
    """Build a zone from a POSIX ``TZ`` rule, keyed by the rule itself.

    The rule becomes the footer of an in-memory TZif file without
    transitions, which ``zoneinfo`` applies to every instant.

    Raises:
        ParseError: If *rule* is not a valid POSIX ``TZ`` rule.
    """
    if not rule.isascii() or "\n" in rule or _POSIX_RULE.match(rule) is None:
        raise ParseError(rule, POSIX_RULE_PATTERN)
    data = _TZIF_HEADER + _TZIF_BLOCK + _TZIF_HEADER + _TZIF_BLOCK
    data += b"\n" + rule.encode("ascii") + b"\n"
    try:
        return ZoneInfo.from_file(io.BytesIO(data), key=rule)
    except ValueError as exc:
        raise ParseError(rule, POSIX_RULE_PATTERN, reason=str(exc)) from exc


def host_default_zone() -> tzinfo:
    """Resolve the machine's configured zone.

    ``tzlocal`` reads ``TZ``, ``/etc/timezone``, and ``/etc/localtime``
    (linked or copied). A ``TZ`` value that is not an IANA key is read as a
    POSIX rule; an unusable one means UTC, as it does for the C library.
    """
    try:
        return tzlocal.reload_localzone()
    except (ZoneInfoNotFoundError, ValueError) as exc:
        rule = os.environ.get("TZ", "").removeprefix(":")
        logger.debug("Host zone %r is not an IANA key: %s", rule, exc)

    try:
        return posix_zone(rule)
    except ParseError:
        logger.warning("TZ=%r is neither a zone key nor a POSIX rule, using UTC", rule)
        return timezone.utc


def resolve_zone(name: str | None) -> tzinfo:
    """Return the zone named *name*, or the host zone when *name* is None."""
    if name is None:
        return host_default_zone()
    return parse_zone_id(name)
