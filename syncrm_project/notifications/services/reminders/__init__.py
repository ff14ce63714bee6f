"""
Activity reminder service layer.

This package contains the time-based reminder passes that are
triggered by schedulers (APScheduler jobs or the
``send_activity_reminders`` management command).

Reminder logic is:
- service-layer only
- timezone-aware (per-user local time, UTC fallback)
- deduplicated through the ReminderEvent ledger
- isolated per candidate
"""

from .config import ReminderConfig
from .engine import Outcome, PassResult, ReminderEngine
from .exceptions import DispatchFailure, LedgerConflict, ReminderError


# =====================================================
# ONE-SHOT PASSES (ENGINE BUILT FROM SETTINGS)
# =====================================================
def send_pre_start_reminders(now=None):
    return ReminderEngine().run_pre_start_pass(now=now)


def send_overdue_reminders(now=None):
    return ReminderEngine().run_overdue_pass(now=now)


def send_daily_digests(now=None):
    return ReminderEngine().run_daily_digest_pass(now=now)


__all__ = [
    # Passes
    "send_pre_start_reminders",
    "send_overdue_reminders",
    "send_daily_digests",

    # Engine
    "ReminderEngine",
    "ReminderConfig",
    "PassResult",
    "Outcome",

    # Errors
    "ReminderError",
    "DispatchFailure",
    "LedgerConflict",
]
