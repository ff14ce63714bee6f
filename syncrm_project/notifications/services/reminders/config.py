"""
Window sizes and cadence knobs for the reminder passes.

Every value has a default matching production behaviour; deployments
override them through ``settings.ACTIVITY_REMINDERS`` (minutes for the
duration keys).
"""

from dataclasses import dataclass, fields, replace
from datetime import timedelta

from django.conf import settings


# Keys in settings.ACTIVITY_REMINDERS that are expressed in minutes
DURATION_KEYS = {
    "pre_start_min_lead",
    "pre_start_max_lead",
    "overdue_min_age",
    "overdue_max_age",
}


@dataclass(frozen=True)
class ReminderConfig:
    # Pre-start pass: scheduled_at in [now + min_lead, now + max_lead]
    pre_start_min_lead: timedelta = timedelta(minutes=50)
    pre_start_max_lead: timedelta = timedelta(minutes=70)

    # Overdue pass: scheduled_at in [now - max_age, now - min_age]
    overdue_min_age: timedelta = timedelta(minutes=50)
    overdue_max_age: timedelta = timedelta(hours=24)

    # Digest pass: local hour == digest_hour and minute < window
    digest_hour: int = 8
    digest_window_minutes: int = 15

    # 1 = sequential processing in the calling thread
    max_workers: int = 1

    def __post_init__(self):
        if self.pre_start_min_lead > self.pre_start_max_lead:
            raise ValueError("pre_start_min_lead must not exceed pre_start_max_lead")
        if self.overdue_min_age > self.overdue_max_age:
            raise ValueError("overdue_min_age must not exceed overdue_max_age")
        if not 0 <= self.digest_hour <= 23:
            raise ValueError("digest_hour must be between 0 and 23")
        if not 1 <= self.digest_window_minutes <= 60:
            raise ValueError("digest_window_minutes must be between 1 and 60")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

    @classmethod
    def from_settings(cls):
        """
        Build a config from ``settings.ACTIVITY_REMINDERS``.
        Unknown keys are ignored; missing keys keep their defaults.
        """
        overrides = getattr(settings, "ACTIVITY_REMINDERS", None) or {}
        known = {f.name for f in fields(cls)}

        values = {}
        for key, value in overrides.items():
            if key not in known:
                continue
            if key in DURATION_KEYS:
                value = timedelta(minutes=int(value))
            else:
                value = int(value)
            values[key] = value

        return replace(cls(), **values)
