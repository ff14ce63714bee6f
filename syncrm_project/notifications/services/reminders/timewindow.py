"""
notifications/services/reminders/timewindow.py

Timezone-local time arithmetic for the reminder passes.

Every helper takes a timezone *string* straight from the user record
and resolves it through ``parse_timezone``. A missing or unknown zone
is never an error: it silently becomes UTC.
"""

from datetime import datetime, timedelta, timezone as dt_timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.utils import timezone


UTC_NAME = "UTC"

ONE_DAY = timedelta(hours=24)

WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


# ============================================================
# TIMEZONE RESOLUTION
# ============================================================

def parse_timezone(value):
    """
    Return a ZoneInfo for ``value``, or None when it is not a zone the
    runtime's tz database knows about. Never raises.
    """
    if not isinstance(value, str) or not value:
        return None

    try:
        return ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return None


def safe_timezone(value):
    """Return ``value`` unchanged when it is a valid zone, else ``"UTC"``."""
    if parse_timezone(value) is None:
        return UTC_NAME
    return value


def resolve_timezone(value):
    return parse_timezone(value) or dt_timezone.utc


def to_local(moment, tz):
    return moment.astimezone(resolve_timezone(tz))


# ============================================================
# LOCAL CLOCK READINGS
# ============================================================

def local_hour(moment, tz):
    return to_local(moment, tz).hour


def local_minute(moment, tz):
    return to_local(moment, tz).minute


def local_date_string(moment, tz):
    return to_local(moment, tz).strftime("%Y-%m-%d")


def day_bounds(tz, now=None):
    """
    Half-open ``(day_start, day_end)`` covering local midnight to
    midnight of the current day in ``tz``.

    Built from UTC midnight of the local calendar date, shifted by
    the zone's offset at ``now``, so the range is always exactly 24h
    and always contains ``now``.
    """
    now = now or timezone.now()
    local = to_local(now, tz)

    midnight_utc = datetime(
        local.year, local.month, local.day, tzinfo=dt_timezone.utc
    )
    day_start = midnight_utc - local.utcoffset()

    return day_start, day_start + ONE_DAY


# ============================================================
# DISPLAY FORMATTING
# ============================================================

def format_time(moment, tz=UTC_NAME):
    """e.g. ``"10:30 AM"``"""
    local = to_local(moment, tz)
    return f"{local.hour % 12 or 12}:{local:%M} {'AM' if local.hour < 12 else 'PM'}"


def format_date(moment, tz=UTC_NAME):
    """e.g. ``"Monday, February 23, 2026"``, independent of the process locale"""
    local = to_local(moment, tz)
    weekday = WEEKDAY_NAMES[local.weekday()]
    month = MONTH_NAMES[local.month - 1]
    return f"{weekday}, {month} {local.day}, {local.year}"


def format_datetime(moment, tz=UTC_NAME):
    """e.g. ``"Monday, February 23, 2026 at 10:30 AM"``"""
    return f"{format_date(moment, tz)} at {format_time(moment, tz)}"
