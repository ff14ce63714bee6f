"""
notifications/services/reminders/engine.py

Orchestrates one reminder pass:

    select candidates -> ledger.exists? -> recipient / status checks
    -> compose -> [claim -> send] (one transaction)

Every candidate runs inside its own exception handler; one bad
candidate never stops the rest of the batch. Only a failure to
select candidates at all escapes a pass.
"""

import enum
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from django.db import connections, transaction
from django.utils import timezone

from notifications.models import ReminderEvent

from .composer import compose_digest, compose_overdue, compose_pre_start
from .config import ReminderConfig
from .dispatch import EmailDispatcher
from .eligibility import (
    digest_activities,
    is_still_open,
    select_digest_recipients,
    select_overdue,
    select_pre_start,
)
from .exceptions import DispatchFailure
from .ledger import DedupeLedger, activity_dedupe_key, digest_dedupe_key
from .timewindow import day_bounds, safe_timezone

logger = logging.getLogger(__name__)

ReminderType = ReminderEvent.ReminderType


class Outcome(str, enum.Enum):
    SENT = "sent"
    EMPTY_DIGEST = "empty_digest"
    SKIPPED_ALREADY_SENT = "skipped_already_sent"
    SKIPPED_NO_RECIPIENT = "skipped_no_recipient"
    SKIPPED_CLOSED = "skipped_closed"
    DISPATCH_FAILED = "dispatch_failed"
    ERROR = "error"


FAILED_OUTCOMES = {Outcome.DISPATCH_FAILED, Outcome.ERROR}


@dataclass(frozen=True)
class CandidateResult:
    candidate: str
    outcome: Outcome


@dataclass
class PassResult:
    name: str
    results: list = field(default_factory=list)

    def count(self, outcome):
        return sum(1 for r in self.results if r.outcome == outcome)

    @property
    def sent(self):
        return self.count(Outcome.SENT)

    @property
    def failed(self):
        return sum(1 for r in self.results if r.outcome in FAILED_OUTCOMES)

    @property
    def skipped(self):
        return len(self.results) - self.sent - self.failed

    def summary(self):
        return f"sent={self.sent} skipped={self.skipped} failed={self.failed}"


class ReminderEngine:
    """
    Entry points for the three scheduled passes.

    Collaborators are injectable so tests can swap the mail channel
    or tighten the windows without touching settings.
    """

    def __init__(self, config=None, ledger=None, dispatcher=None):
        self.config = config or ReminderConfig.from_settings()
        self.ledger = ledger or DedupeLedger()
        self.dispatcher = dispatcher or EmailDispatcher()

    # =====================================================
    # ENTRY POINTS
    # =====================================================
    def run_pre_start_pass(self, now=None):
        now = now or timezone.now()
        activities = select_pre_start(self.config, now)

        return self._run_pass(
            ReminderType.PRE_START.value,
            activities,
            lambda activity: self._process_activity(
                activity, ReminderType.PRE_START, compose_pre_start
            ),
            describe=lambda activity: f"activity {activity.pk}",
        )

    def run_overdue_pass(self, now=None):
        now = now or timezone.now()
        activities = select_overdue(self.config, now)

        return self._run_pass(
            ReminderType.OVERDUE.value,
            activities,
            lambda activity: self._process_activity(
                activity, ReminderType.OVERDUE, compose_overdue
            ),
            describe=lambda activity: f"activity {activity.pk}",
        )

    def run_daily_digest_pass(self, now=None):
        now = now or timezone.now()
        candidates = select_digest_recipients(self.config, now)

        return self._run_pass(
            ReminderType.DAILY_DIGEST.value,
            candidates,
            lambda candidate: self._process_digest(candidate, now),
            describe=lambda candidate: f"user {candidate.user.pk} on {candidate.local_date}",
        )

    # =====================================================
    # BATCH LOOP (PER-CANDIDATE ISOLATION)
    # =====================================================
    def _run_pass(self, name, candidates, handler, describe):
        result = PassResult(name=name)
        logger.info("[reminders:%s] Found %s eligible candidates", name, len(candidates))

        if self.config.max_workers <= 1 or len(candidates) <= 1:
            for candidate in candidates:
                result.results.append(
                    self._isolated(name, handler, candidate, describe)
                )
        else:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                futures = [
                    pool.submit(self._isolated_in_worker, name, handler, candidate, describe)
                    for candidate in candidates
                ]
                for future in futures:
                    result.results.append(future.result())

        logger.info("[reminders:%s] Done: %s", name, result.summary())
        return result

    def _isolated(self, name, handler, candidate, describe):
        label = describe(candidate)

        try:
            outcome = handler(candidate)
        except DispatchFailure as exc:
            # No ledger row was kept, so the next tick retries
            logger.error("[reminders:%s] Dispatch failed for %s: %s", name, label, exc)
            outcome = Outcome.DISPATCH_FAILED
        except Exception:
            logger.exception("[reminders:%s] Unexpected error for %s", name, label)
            outcome = Outcome.ERROR

        logger.debug("[reminders:%s] %s -> %s", name, label, outcome.value)
        return CandidateResult(candidate=label, outcome=outcome)

    def _isolated_in_worker(self, name, handler, candidate, describe):
        try:
            return self._isolated(name, handler, candidate, describe)
        finally:
            # Worker threads own their connections
            connections.close_all()

    # =====================================================
    # CLAIM + SEND
    # =====================================================
    def _claim_and_send(self, dedupe_key, to, message, **metadata):
        """
        Claim the dedupe key and send in one transaction: a failed send
        rolls the claim back, a lost claim means someone else sent it.
        """
        with transaction.atomic():
            event = self.ledger.claim(dedupe_key, **metadata)
            if event is None:
                return Outcome.SKIPPED_ALREADY_SENT

            self.dispatcher.send(to, message.subject, message.html, message.text)

        logger.info("Sent %s to %s", dedupe_key, to)
        return Outcome.SENT

    # =====================================================
    # PRE-START / OVERDUE
    # =====================================================
    def _process_activity(self, activity, reminder_type, compose):
        dedupe_key = activity_dedupe_key(reminder_type, activity.pk)

        if self.ledger.exists(dedupe_key):
            return Outcome.SKIPPED_ALREADY_SENT

        # Status may have changed since selection
        if not is_still_open(activity):
            logger.info("Activity %s closed since selection, skipping %s", activity.pk, reminder_type)
            return Outcome.SKIPPED_CLOSED

        user = activity.assigned_to
        if not user.is_active or not user.email:
            logger.info("Skipping %s: assignee %s has no usable email", dedupe_key, user.pk)
            return Outcome.SKIPPED_NO_RECIPIENT

        tz = safe_timezone(user.timezone)
        message = compose(activity, user, activity.lead, tz)

        return self._claim_and_send(
            dedupe_key,
            user.email,
            message,
            reminder_type=reminder_type,
            user=user,
            activity=activity,
            organization=activity.organization,
        )

    # =====================================================
    # DAILY DIGEST
    # =====================================================
    def _process_digest(self, candidate, now):
        user = candidate.user
        dedupe_key = digest_dedupe_key(user.pk, candidate.local_date)

        if self.ledger.exists(dedupe_key):
            return Outcome.SKIPPED_ALREADY_SENT

        if not user.is_active or not user.email:
            logger.info("Skipping %s: user has no usable email", dedupe_key)
            return Outcome.SKIPPED_NO_RECIPIENT

        day_start, day_end = day_bounds(candidate.timezone, now)
        activities = digest_activities(user, day_start, day_end)

        metadata = {
            "reminder_type": ReminderType.DAILY_DIGEST,
            "user": user,
            "digest_date": candidate.local_date,
            "organization": user.organization,
        }

        if not activities:
            # Record anyway so the user is not rescanned later today
            if self.ledger.claim(dedupe_key, **metadata) is None:
                return Outcome.SKIPPED_ALREADY_SENT
            logger.info("No activities for %s, recorded empty digest", dedupe_key)
            return Outcome.EMPTY_DIGEST

        message = compose_digest(user, candidate.timezone, day_start, activities)

        return self._claim_and_send(dedupe_key, user.email, message, **metadata)
