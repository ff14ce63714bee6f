import locale
from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from notifications.services.reminders.timewindow import (
    day_bounds,
    format_date,
    format_datetime,
    format_time,
    local_date_string,
    local_hour,
    local_minute,
    parse_timezone,
    safe_timezone,
)


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


@pytest.mark.parametrize("tz", ["America/New_York", "Europe/London", "Asia/Tokyo", "UTC"])
def test_safe_timezone_keeps_valid_zone(tz):
    assert safe_timezone(tz) == tz


@pytest.mark.parametrize(
    "tz",
    ["Not/ATimezone", "invalid", "", None, 42, "../etc/passwd", "/usr/share/zoneinfo/UTC"],
)
def test_safe_timezone_falls_back_to_utc(tz):
    assert safe_timezone(tz) == "UTC"
    assert parse_timezone(tz) is None


def test_local_date_string_uses_zone_calendar():
    late_evening = utc(2026, 2, 23, 23, 30)
    assert local_date_string(late_evening, "UTC") == "2026-02-23"
    assert local_date_string(late_evening, "Europe/Berlin") == "2026-02-24"

    early_morning = utc(2026, 2, 23, 1, 0)
    assert local_date_string(early_morning, "America/New_York") == "2026-02-22"


def test_local_hour_and_minute():
    assert local_hour(utc(2026, 2, 23, 8, 0), "UTC") == 8
    assert local_hour(utc(2026, 2, 23, 13, 0), "America/New_York") == 8

    # Asia/Kolkata is UTC+05:30
    moment = utc(2026, 2, 23, 2, 40)
    assert local_hour(moment, "Asia/Kolkata") == 8
    assert local_minute(moment, "Asia/Kolkata") == 10


def test_invalid_zone_reads_as_utc():
    moment = utc(2026, 2, 23, 17, 45)
    assert local_hour(moment, "Mars/Olympus_Mons") == 17
    assert local_minute(moment, "Mars/Olympus_Mons") == 45
    assert local_date_string(moment, None) == "2026-02-23"


def test_day_bounds_for_offset_zone():
    start, end = day_bounds("Europe/Berlin", now=utc(2026, 2, 23, 12, 0))

    assert start == utc(2026, 2, 22, 23, 0)
    assert end == utc(2026, 2, 23, 23, 0)


@pytest.mark.parametrize(
    "tz, now",
    [
        ("UTC", utc(2026, 2, 23, 0, 0)),
        ("UTC", utc(2026, 2, 23, 23, 59, 59)),
        ("America/New_York", utc(2026, 2, 23, 4, 59)),
        ("Asia/Kolkata", utc(2026, 2, 23, 18, 29)),
        ("Pacific/Chatham", utc(2026, 6, 1, 12, 0)),
        # DST start / end days
        ("America/New_York", utc(2026, 3, 8, 15, 0)),
        ("Europe/London", utc(2026, 10, 25, 9, 0)),
        ("Not/AZone", utc(2026, 2, 23, 12, 0)),
    ],
)
def test_day_bounds_span_one_day_and_contain_now(tz, now):
    start, end = day_bounds(tz, now=now)

    assert end - start == timedelta(hours=24)
    assert start <= now < end


def test_day_bounds_start_is_local_midnight_outside_dst_changes():
    now = utc(2026, 2, 23, 15, 0)
    start, _ = day_bounds("America/New_York", now=now)

    assert start == utc(2026, 2, 23, 5, 0)
    assert local_hour(start, "America/New_York") == 0


def test_format_helpers_render_in_target_zone():
    moment = utc(2026, 2, 23, 15, 30)

    assert format_time(moment, "America/New_York") == "10:30 AM"
    assert format_time(moment) == "3:30 PM"
    assert format_date(moment, "America/New_York") == "Monday, February 23, 2026"
    assert format_datetime(moment, "America/New_York") == (
        "Monday, February 23, 2026 at 10:30 AM"
    )


def test_format_time_midnight_and_noon():
    assert format_time(utc(2026, 2, 23, 0, 5)) == "12:05 AM"
    assert format_time(utc(2026, 2, 23, 12, 0)) == "12:00 PM"


@pytest.fixture
def german_time_locale():
    previous = locale.setlocale(locale.LC_TIME)
    try:
        locale.setlocale(locale.LC_TIME, "de_DE.UTF-8")
    except locale.Error:
        pytest.skip("de_DE.UTF-8 locale is not installed")
    yield
    locale.setlocale(locale.LC_TIME, previous)


def test_format_date_ignores_process_locale(german_time_locale):
    assert format_date(utc(2026, 12, 27, 12, 0)) == "Sunday, December 27, 2026"
    assert format_datetime(utc(2026, 3, 4, 9, 15)) == "Wednesday, March 4, 2026 at 9:15 AM"


@pytest.mark.parametrize(
    "month,expected",
    [(1, "Thursday, January 1, 2026"), (5, "Friday, May 1, 2026"), (10, "Thursday, October 1, 2026")],
)
def test_format_date_month_and_weekday_names(month, expected):
    assert format_date(utc(2026, month, 1, 12, 0)) == expected
