"""Tests for canonical rendering and the shared parsing grammar."""

from datetime import date, datetime, timedelta, timezone

import pytest

from vpacktime.domain.errors import FormatError, ParseError
from vpacktime.domain.formats import (
    format_date,
    format_offset,
    format_time,
    parse_offset,
    parse_text,
)
from vpacktime.domain.kinds import TemporalKind


class TestFormatDate:
    def test_pads_fields(self) -> None:
        assert format_date(date(2016, 9, 7)) == "2016-09-07"

    def test_four_digit_year_below_1000(self) -> None:
        assert format_date(date(5, 1, 1)) == "0005-01-01"


class TestFormatTime:
    def test_milliseconds(self) -> None:
        assert format_time(datetime(1970, 1, 18, 2, 43, 8, 621000)) == "02:43:08.621"

    def test_truncates_not_rounds(self) -> None:
        assert format_time(datetime(2020, 1, 1, 0, 0, 0, 999999)) == "00:00:00.999"

    def test_zero_fraction(self) -> None:
        assert format_time(datetime(2020, 1, 1, 23, 59, 59)) == "23:59:59.000"


class TestFormatOffset:
    @pytest.mark.parametrize(
        "offset,expected",
        [
            (timedelta(0), "Z"),
            (timedelta(hours=2), "+02:00"),
            (timedelta(hours=-5), "-05:00"),
            (timedelta(hours=5, minutes=45), "+05:45"),
            (timedelta(hours=-3, minutes=-30), "-03:30"),
            (timedelta(minutes=53, seconds=28), "+00:53:28"),
        ],
    )
    def test_renders(self, offset: timedelta, expected: str) -> None:
        assert format_offset(offset) == expected

    def test_sub_second_offset_rejected(self) -> None:
        with pytest.raises(FormatError):
            format_offset(timedelta(hours=1, microseconds=5))

    def test_beyond_eighteen_hours_rejected(self) -> None:
        with pytest.raises(FormatError, match="18:00"):
            format_offset(timedelta(hours=19))


class TestParseOffset:
    def test_zulu(self) -> None:
        assert parse_offset("Z") is timezone.utc

    def test_zero_offset_is_utc(self) -> None:
        assert parse_offset("+00:00") is timezone.utc

    def test_negative(self) -> None:
        assert parse_offset("-03:30") == timezone(-timedelta(hours=3, minutes=30))

    def test_seconds(self) -> None:
        assert parse_offset("+00:53:28") == timezone(timedelta(minutes=53, seconds=28))

    def test_not_an_offset(self) -> None:
        assert parse_offset("Europe/Berlin") is None

    @pytest.mark.parametrize("text", ["+24:00", "+01:60", "-99:00", "+18:00:01", "-19:00"])
    def test_out_of_range(self, text: str) -> None:
        with pytest.raises(ParseError):
            parse_offset(text)

    @pytest.mark.parametrize("text", ["+18:00", "-18:00"])
    def test_eighteen_hours_is_the_limit(self, text: str) -> None:
        assert abs(parse_offset(text).utcoffset(None)) == timedelta(hours=18)

    def test_out_of_range_in_date_time(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_text(TemporalKind.OFFSET_DATE_TIME, "2016-09-28T13:30:16.216+19:00")
        assert exc_info.value.text == "2016-09-28T13:30:16.216+19:00"


class TestParseText:
    def test_canonical_local_date(self) -> None:
        parsed = parse_text(TemporalKind.LOCAL_DATE, "1970-01-18")
        assert parsed.local == date(1970, 1, 18)
        assert parsed.offset is None
        assert parsed.zone is None

    def test_canonical_instant(self) -> None:
        parsed = parse_text(TemporalKind.INSTANT, "1970-01-18T02:43:08.621Z")
        assert parsed.local == datetime(1970, 1, 18, 2, 43, 8, 621000)
        assert parsed.offset is timezone.utc

    def test_canonical_zoned(self) -> None:
        parsed = parse_text(
            TemporalKind.ZONED_DATE_TIME, "2016-09-28T13:30:16.216+02:00[Europe/Berlin]"
        )
        assert parsed.offset == timezone(timedelta(hours=2))
        assert parsed.zone == "Europe/Berlin"

    def test_iso_fallback_without_fraction(self) -> None:
        parsed = parse_text(TemporalKind.LOCAL_DATE_TIME, "2016-09-28T13:30:16")
        assert parsed.local == datetime(2016, 9, 28, 13, 30, 16)

    def test_iso_fallback_without_seconds(self) -> None:
        parsed = parse_text(TemporalKind.LOCAL_DATE_TIME, "2016-09-28T13:30")
        assert parsed.local == datetime(2016, 9, 28, 13, 30)

    def test_iso_fallback_microseconds(self) -> None:
        parsed = parse_text(TemporalKind.OFFSET_DATE_TIME, "2016-09-28T13:30:16.123456+02:00")
        assert parsed.local.microsecond == 123456

    def test_nanoseconds_truncated(self) -> None:
        parsed = parse_text(TemporalKind.OFFSET_DATE_TIME, "2016-09-28T13:30:16.123456789Z")
        assert parsed.local.microsecond == 123456

    def test_zoned_fallback_without_zone(self) -> None:
        parsed = parse_text(TemporalKind.ZONED_DATE_TIME, "2016-09-28T13:30:16+02:00")
        assert parsed.zone is None

    @pytest.mark.parametrize(
        "kind,text",
        [
            (TemporalKind.LOCAL_DATE, "2016-9-28"),
            (TemporalKind.LOCAL_DATE, "2016-09-28T00:00:00.000"),
            (TemporalKind.LOCAL_DATE_TIME, "2016-09-28T13:30:16.216Z"),
            (TemporalKind.INSTANT, "2016-09-28T13:30:16.216"),
            (TemporalKind.OFFSET_DATE_TIME, "2016-09-28T13:30:16.216+02:00[Europe/Berlin]"),
            (TemporalKind.OFFSET_DATE_TIME, "2016-09-28 13:30:16.216+02:00"),
            (TemporalKind.ZONED_DATE_TIME, "2016-09-28T13:30:16.216[Europe/Berlin]"),
        ],
    )
    def test_rejects_other_shapes(self, kind: TemporalKind, text: str) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_text(kind, text)
        assert exc_info.value.text == text

    def test_invalid_calendar_date(self) -> None:
        with pytest.raises(ParseError, match="2016-02-30"):
            parse_text(TemporalKind.LOCAL_DATE, "2016-02-30")

    def test_invalid_hour(self) -> None:
        with pytest.raises(ParseError):
            parse_text(TemporalKind.LOCAL_DATE_TIME, "2016-02-01T24:00:00.000")

    def test_non_ascii_digits_rejected(self) -> None:
        with pytest.raises(ParseError):
            parse_text(TemporalKind.LOCAL_DATE, "٢٠١٦-01-01")
