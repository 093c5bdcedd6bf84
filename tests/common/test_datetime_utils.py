from datetime import date, datetime, timedelta, timezone

import pytest

from src.workforce_attendance.workforce_attendance.common.datetime_utils import (
    day_window,
    format_hours_clock,
    format_hours_hm,
    format_late_message,
    iter_days,
    month_window,
    parse_iso_datetime,
    to_iso,
)


def test_parse_iso_datetime_with_z_suffix_is_naive_utc():
    assert parse_iso_datetime("2024-01-10T09:10:00Z") == datetime(2024, 1, 10, 9, 10)


def test_parse_iso_datetime_converts_offsets_to_utc():
    assert parse_iso_datetime("2024-01-10T16:10:00+07:00") == datetime(2024, 1, 10, 9, 10)


def test_to_iso_has_milliseconds_and_z():
    assert to_iso(datetime(2024, 1, 10, 9, 10)) == "2024-01-10T09:10:00.000Z"
    assert to_iso(datetime(2024, 1, 10, 16, 10, tzinfo=timezone(timedelta(hours=7)))) == "2024-01-10T09:10:00.000Z"
    assert to_iso(None) is None


def test_day_window_is_half_open():
    start, end = day_window(date(2024, 1, 10))

    assert start == datetime(2024, 1, 10)
    assert end == datetime(2024, 1, 11)


def test_month_window_wraps_december():
    assert month_window(2024, 12) == (datetime(2024, 12, 1), datetime(2025, 1, 1))


def test_iter_days_is_inclusive():
    assert list(iter_days(date(2024, 2, 28), date(2024, 3, 1))) == [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]


@pytest.mark.parametrize(
    "hours, expected",
    [(0, "0h 0m"), (8.35, "8h 21m"), (7.5, "7h 30m"), (1.999, "2h 0m"), (8.375, "8h 23m")],
)
def test_format_hours_hm(hours, expected):
    assert format_hours_hm(hours) == expected


def test_format_hours_clock():
    assert format_hours_clock(0.93) == "0:56"
    assert format_hours_clock(1.0) == "1:00"
    assert format_hours_clock(0.375) == "0:23"


def test_format_late_message():
    assert format_late_message(10.5) == "0:10:30 late"
    assert format_late_message(75) == "1:15:00 late"
