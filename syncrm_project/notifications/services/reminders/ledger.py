"""
notifications/services/reminders/ledger.py

Durable dedupe ledger backed by ReminderEvent.

The unique constraint on ``dedupe_key`` is the single point of truth:
``claim`` inserts the row *before* the email goes out, inside the
caller's transaction, so a failed send rolls the claim back and a
concurrent run of the same pass loses the insert.
"""

import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from notifications.models import ReminderEvent

from .exceptions import LedgerConflict

logger = logging.getLogger(__name__)


ACTIVITY_REMINDER_TYPES = {
    ReminderEvent.ReminderType.PRE_START.value,
    ReminderEvent.ReminderType.OVERDUE.value,
}


# ============================================================
# DEDUPE KEY BUILDERS
# ============================================================

def activity_dedupe_key(reminder_type, activity_id):
    """``"{reminder_type}:{activity_id}"`` for pre_start / overdue."""
    value = ReminderEvent.ReminderType(reminder_type).value
    if value not in ACTIVITY_REMINDER_TYPES:
        raise ValueError(f"Not an activity-scoped reminder type: {value!r}")
    return f"{value}:{activity_id}"


def digest_dedupe_key(user_id, local_date):
    """``"daily_digest:{user_id}:{YYYY-MM-DD}"`` in the user's local date."""
    return f"{ReminderEvent.ReminderType.DAILY_DIGEST.value}:{user_id}:{local_date}"


# ============================================================
# LEDGER
# ============================================================

class DedupeLedger:

    def exists(self, dedupe_key):
        return ReminderEvent.objects.filter(dedupe_key=dedupe_key).exists()

    def record(
        self,
        dedupe_key,
        *,
        reminder_type,
        user,
        activity=None,
        digest_date="",
        organization=None,
    ):
        """
        Insert the ledger row for ``dedupe_key``.
        Raises LedgerConflict if the key is already taken.
        """
        try:
            # Savepoint: a failed insert must not poison the caller's transaction
            with transaction.atomic():
                return ReminderEvent.objects.create(
                    dedupe_key=dedupe_key,
                    reminder_type=reminder_type,
                    user=user,
                    activity=activity,
                    digest_date=digest_date or "",
                    organization=organization,
                    sent_at=timezone.now(),
                )
        except IntegrityError as exc:
            raise LedgerConflict(dedupe_key) from exc

    def claim(self, dedupe_key, **metadata):
        """
        Insert-if-absent. Returns the new ReminderEvent, or None when
        another run already owns ``dedupe_key``.
        """
        try:
            return self.record(dedupe_key, **metadata)
        except LedgerConflict:
            logger.info("Dedupe key %s already claimed", dedupe_key)
            return None
