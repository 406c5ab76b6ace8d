"""Tests for display formatting of slot instants."""
from datetime import datetime, timezone

from dateutil import tz

from clinic_booking.time_format import (
    format_instant,
    parse_display,
    parse_instant,
    split_display,
)


def test_utc_string_formats_in_tokyo():
    assert format_instant("2025-11-01T01:00:00+00:00") == "2025-11-01 10:00"


def test_z_suffix_is_accepted():
    assert format_instant("2025-11-01T15:30:00Z") == "2025-11-02 00:30"


def test_24_hour_clock_and_zero_padding():
    instant = datetime(2025, 1, 2, 14, 5, tzinfo=timezone.utc)
    assert format_instant(instant) == "2025-01-02 23:05"


def test_naive_datetime_is_treated_as_utc():
    assert format_instant(datetime(2025, 1, 2, 0, 0)) == "2025-01-02 09:00"


def test_custom_timezone():
    instant = datetime(2025, 7, 1, 12, 0, tzinfo=timezone.utc)
    assert format_instant(instant, tz.gettz("Europe/London")) == "2025-07-01 13:00"


def test_split_display_separates_date_and_time():
    assert split_display("2025-11-01 10:00") == ("2025-11-01", "10:00")


def test_reformatting_own_output_is_stable():
    for raw in ["2025-11-01T01:00:00Z", "2024-02-29T23:59:00Z", "2025-12-31T15:00:00Z"]:
        first = format_instant(raw)
        again = format_instant(parse_display(first))
        assert again == first
        assert split_display(again) == split_display(first)


def test_parse_instant_keeps_offset():
    parsed = parse_instant("2025-11-01T10:00:00+09:00")
    assert parsed.astimezone(timezone.utc).hour == 1
