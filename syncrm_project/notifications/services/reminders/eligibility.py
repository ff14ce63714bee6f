"""
notifications/services/reminders/eligibility.py

Stateless candidate selection for the three reminder passes.

Each selector is a pure function of the database and ``now``; nothing
here remembers previous invocations. Dedupe is the ledger's job.
"""

from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.utils import timezone

from leads.models import Activity, Lead

from .timewindow import local_date_string, local_hour, local_minute, safe_timezone


@dataclass(frozen=True)
class DigestCandidate:
    user: object
    timezone: str
    local_date: str


def _todo_activities():
    return (
        Activity.objects
        .select_related("assigned_to", "lead")
        .filter(status=Activity.Status.TODO, scheduled_at__isnull=False)
    )


# ============================================================
# PRE-START
# ============================================================

def select_pre_start(config, now=None):
    """Todo activities starting within the pre-start window."""
    now = now or timezone.now()

    return list(
        _todo_activities().filter(
            scheduled_at__gte=now + config.pre_start_min_lead,
            scheduled_at__lte=now + config.pre_start_max_lead,
        )
    )


# ============================================================
# OVERDUE
# ============================================================

def select_overdue(config, now=None):
    """
    Todo activities whose start passed at least ``overdue_min_age``
    ago. Anything older than ``overdue_max_age`` is never resurfaced.
    """
    now = now or timezone.now()

    return list(
        _todo_activities().filter(
            scheduled_at__gte=now - config.overdue_max_age,
            scheduled_at__lte=now - config.overdue_min_age,
        )
    )


def is_still_open(activity):
    """Re-read the activity's status straight from the database."""
    return (
        Activity.objects
        .filter(pk=activity.pk, status=Activity.Status.TODO)
        .exists()
    )


# ============================================================
# DAILY DIGEST
# ============================================================

def select_digest_recipients(config, now=None):
    """
    Active users with an email and an organization whose local clock
    reads ``digest_hour:00`` to ``digest_hour:(window - 1)``.
    """
    now = now or timezone.now()
    User = get_user_model()

    users = (
        User.objects
        .select_related("organization")
        .filter(is_active=True, organization__isnull=False)
        .exclude(email="")
        .order_by("pk")
    )

    candidates = []
    for user in users:
        tz = safe_timezone(user.timezone)

        if local_hour(now, tz) != config.digest_hour:
            continue
        if local_minute(now, tz) >= config.digest_window_minutes:
            continue

        candidates.append(
            DigestCandidate(user=user, timezone=tz, local_date=local_date_string(now, tz))
        )

    return candidates


def digest_activities(user, day_start, day_end):
    """
    All of ``user``'s activities (any status) scheduled inside
    ``[day_start, day_end)``, oldest first, with each distinct lead
    fetched exactly once.
    """
    activities = list(
        Activity.objects
        .filter(
            assigned_to=user,
            scheduled_at__gte=day_start,
            scheduled_at__lt=day_end,
        )
        .order_by("scheduled_at", "pk")
    )

    lead_ids = {a.lead_id for a in activities}
    leads = Lead.objects.in_bulk(lead_ids)

    for activity in activities:
        # Reuse the fetched lead; a missing one renders as "Unknown"
        activity.digest_lead = leads.get(activity.lead_id)

    return activities
