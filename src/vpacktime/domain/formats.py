"""Canonical patterns and the parsing grammar shared by all temporal codecs.

Patterns are documented in ``yyyy-MM-dd'T'HH:mm:ss.SSSXXX`` notation:
- Instant:        yyyy-MM-dd'T'HH:mm:ss.SSS'Z'  (always UTC)
- LocalDate:      yyyy-MM-dd
- LocalDateTime:  yyyy-MM-dd'T'HH:mm:ss.SSS
- OffsetDateTime: yyyy-MM-dd'T'HH:mm:ss.SSSXXX
- ZonedDateTime:  yyyy-MM-dd'T'HH:mm:ss.SSSXXX'['zone-id']'

Rendering formats fields explicitly instead of going through ``strftime`` so
years below 1000 keep four digits on every platform. Parsing tries the
canonical grammar first, then the ISO-8601 shape produced by standard
formatters (optional seconds, 1-9 fraction digits).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from vpacktime.domain.errors import FormatError, ParseError
from vpacktime.domain.kinds import TemporalKind

PATTERNS: dict[TemporalKind, str] = {
    TemporalKind.INSTANT: "yyyy-MM-dd'T'HH:mm:ss.SSS'Z'",
    TemporalKind.LOCAL_DATE: "yyyy-MM-dd",
    TemporalKind.LOCAL_DATE_TIME: "yyyy-MM-dd'T'HH:mm:ss.SSS",
    TemporalKind.OFFSET_DATE_TIME: "yyyy-MM-dd'T'HH:mm:ss.SSSXXX",
    TemporalKind.ZONED_DATE_TIME: "yyyy-MM-dd'T'HH:mm:ss.SSSXXX'['zone-id']'",
    TemporalKind.ZONE_ID: "zone-id",
}

_DATE = r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
_CANONICAL_TIME = r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})\.(?P<fraction>\d{3})"
_ISO_TIME = (
    r"T(?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.(?P<fraction>\d{1,9}))?)?"
)
_OFFSET = r"(?P<offset>Z|[+-]\d{2}:\d{2}(?::\d{2})?)"
_ZONE = r"\[(?P<zone>[^\[\]]+)\]"

# Zone offsets are bounded at 18 hours either way.
MAX_OFFSET = timedelta(hours=18)

OFFSET_ID = re.compile(
    r"Z|(?P<sign>[+-])(?P<hours>\d{2}):(?P<minutes>\d{2})(?::(?P<seconds>\d{2}))?",
    re.ASCII,
)

# Canonical grammar first, ISO-8601 fallback second.
GRAMMAR: dict[TemporalKind, tuple[re.Pattern[str], ...]] = {
    TemporalKind.INSTANT: (
        re.compile(_DATE + _CANONICAL_TIME + r"(?P<offset>Z)", re.ASCII),
        re.compile(_DATE + _ISO_TIME + _OFFSET, re.ASCII),
    ),
    TemporalKind.LOCAL_DATE: (re.compile(_DATE, re.ASCII),),
    TemporalKind.LOCAL_DATE_TIME: (
        re.compile(_DATE + _CANONICAL_TIME, re.ASCII),
        re.compile(_DATE + _ISO_TIME, re.ASCII),
    ),
    TemporalKind.OFFSET_DATE_TIME: (
        re.compile(_DATE + _CANONICAL_TIME + _OFFSET, re.ASCII),
        re.compile(_DATE + _ISO_TIME + _OFFSET, re.ASCII),
    ),
    TemporalKind.ZONED_DATE_TIME: (
        re.compile(_DATE + _CANONICAL_TIME + _OFFSET + _ZONE, re.ASCII),
        re.compile(_DATE + _ISO_TIME + _OFFSET + f"(?:{_ZONE})?", re.ASCII),
    ),
}


@dataclass(frozen=True, slots=True)
class ParsedText:
    """Fields recovered from a temporal string.

    Attributes:
        local: Wall-clock value; a ``date`` for date-only grammars, otherwise
            a naive ``datetime``.
        offset: Fixed offset from the text, if the grammar carries one.
        zone: Bracketed zone id, if present.
    """

    local: date | datetime
    offset: timezone | None = None
    zone: str | None = None


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def format_date(value: date) -> str:
    """Render ``yyyy-MM-dd``."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def format_time(value: datetime) -> str:
    """Render ``HH:mm:ss.SSS``, truncating to milliseconds."""
    return (
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond // 1000:03d}"
    )


def format_offset(offset: timedelta) -> str:
    """Render an offset as ``Z``, ``+HH:MM`` or ``+HH:MM:SS``.

    Raises:
        FormatError: If the offset exceeds 18 hours or has sub-second precision.
    """
    if abs(offset) > MAX_OFFSET:
        msg = f"Offset {offset} is beyond +/-18:00 and cannot be rendered"
        raise FormatError(msg)
    if offset.microseconds:
        msg = f"Offset {offset} has sub-second precision and cannot be rendered"
        raise FormatError(msg)
    if not offset:
        return "Z"
    sign = "-" if offset < timedelta(0) else "+"
    total = abs(int(offset.total_seconds()))
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}"
    if seconds:
        text = f"{text}:{seconds:02d}"
    return text


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_offset(text: str) -> timezone | None:
    """Parse an offset id, returning None when *text* is not one.

    Raises:
        ParseError: If *text* looks like an offset but is out of range.
    """
    match = OFFSET_ID.fullmatch(text)
    if match is None:
        return None
    if text == "Z":
        return timezone.utc
    minutes = int(match["minutes"])
    seconds = int(match["seconds"] or 0)
    if minutes > 59 or seconds > 59:
        raise ParseError(text, "+HH:MM", reason="offset field out of range")
    delta = timedelta(hours=int(match["hours"]), minutes=minutes, seconds=seconds)
    if match["sign"] == "-":
        delta = -delta
    if abs(delta) > MAX_OFFSET:
        raise ParseError(text, "+HH:MM", reason="offset beyond +/-18:00")
    if not delta:
        return timezone.utc
    return timezone(delta)


def parse_text(kind: TemporalKind, text: str) -> ParsedText:
    """Match *text* against the grammar for *kind* and build its fields.

    Raises:
        ParseError: If no grammar matches, or a field is out of range
            (e.g. February 30th).
    """
    pattern = PATTERNS[kind]
    for grammar in GRAMMAR[kind]:
        match = grammar.fullmatch(text)
        if match is not None:
            break
    else:
        raise ParseError(text, pattern)

    fields = match.groupdict()
    year, month, day = int(fields["year"]), int(fields["month"]), int(fields["day"])
    try:
        if fields.get("hour") is None:
            local: date | datetime = date(year, month, day)
        else:
            # Python keeps microseconds; extra nanosecond digits are dropped.
            fraction = (fields.get("fraction") or "").ljust(6, "0")[:6]
            local = datetime(
                year,
                month,
                day,
                int(fields["hour"]),
                int(fields["minute"]),
                int(fields.get("second") or 0),
                int(fraction),
            )
    except ValueError as exc:
        raise ParseError(text, pattern, reason=str(exc)) from exc

    offset = None
    if fields.get("offset") is not None:
        try:
            offset = parse_offset(fields["offset"])
        except ParseError as exc:
            raise ParseError(text, pattern, reason=str(exc)) from exc

    return ParsedText(local=local, offset=offset, zone=fields.get("zone"))
