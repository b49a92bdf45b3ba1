"""The closed set of temporal kinds a codec can be registered for.

The mapping framework picks a kind when a field is registered and asks the
codec registry for that kind's encoder/decoder pair. Values are never
inspected at runtime to choose a codec.
"""

from __future__ import annotations

from enum import StrEnum


class TemporalKind(StrEnum):
    """Temporal kinds with a canonical wire encoding."""

    INSTANT = "instant"
    LOCAL_DATE = "local_date"
    LOCAL_DATE_TIME = "local_date_time"
    OFFSET_DATE_TIME = "offset_date_time"
    ZONED_DATE_TIME = "zoned_date_time"
    ZONE_ID = "zone_id"


# Kinds that describe a point or a calendar position rather than a zone.
VALUE_KINDS: frozenset[TemporalKind] = frozenset(TemporalKind) - {TemporalKind.ZONE_ID}
