import pytest
from django.db import transaction

from notifications.models import ReminderEvent
from notifications.services.reminders.exceptions import LedgerConflict
from notifications.services.reminders.ledger import (
    DedupeLedger,
    activity_dedupe_key,
    digest_dedupe_key,
)


def test_activity_dedupe_key_format():
    assert activity_dedupe_key("pre_start", 123) == "pre_start:123"
    assert activity_dedupe_key(ReminderEvent.ReminderType.OVERDUE, 7) == "overdue:7"


def test_activity_dedupe_keys_differ_per_type_and_activity():
    assert activity_dedupe_key("pre_start", 1) != activity_dedupe_key("overdue", 1)
    assert activity_dedupe_key("pre_start", 1) != activity_dedupe_key("pre_start", 2)


def test_activity_dedupe_key_rejects_digest_type():
    with pytest.raises(ValueError):
        activity_dedupe_key("daily_digest", 1)


def test_digest_dedupe_key_format():
    assert digest_dedupe_key(42, "2026-02-23") == "daily_digest:42:2026-02-23"
    assert digest_dedupe_key(42, "2026-02-23") != digest_dedupe_key(42, "2026-02-24")
    assert digest_dedupe_key(42, "2026-02-23") != digest_dedupe_key(43, "2026-02-23")


def test_record_then_exists(user):
    ledger = DedupeLedger()
    key = digest_dedupe_key(user.pk, "2026-02-23")

    assert not ledger.exists(key)

    event = ledger.record(
        key,
        reminder_type=ReminderEvent.ReminderType.DAILY_DIGEST,
        user=user,
        digest_date="2026-02-23",
        organization=user.organization,
    )

    assert ledger.exists(key)
    assert event.reminder_type == "daily_digest"
    assert event.digest_date == "2026-02-23"
    assert event.activity is None
    assert event.sent_at is not None


def test_record_twice_raises_conflict(user):
    ledger = DedupeLedger()
    key = digest_dedupe_key(user.pk, "2026-02-23")
    metadata = {"reminder_type": "daily_digest", "user": user, "digest_date": "2026-02-23"}

    ledger.record(key, **metadata)

    with pytest.raises(LedgerConflict) as excinfo:
        ledger.record(key, **metadata)

    assert excinfo.value.dedupe_key == key
    assert ReminderEvent.objects.filter(dedupe_key=key).count() == 1


def test_claim_is_insert_if_absent(user, make_activity, now):
    ledger = DedupeLedger()
    activity = make_activity(user, now)
    key = activity_dedupe_key("pre_start", activity.pk)
    metadata = {"reminder_type": "pre_start", "user": user, "activity": activity}

    first = ledger.claim(key, **metadata)
    second = ledger.claim(key, **metadata)

    assert first is not None
    assert first.activity == activity
    assert second is None
    assert ReminderEvent.objects.filter(dedupe_key=key).count() == 1


def test_lost_claim_leaves_outer_transaction_usable(user):
    ledger = DedupeLedger()
    key = digest_dedupe_key(user.pk, "2026-02-23")
    metadata = {"reminder_type": "daily_digest", "user": user, "digest_date": "2026-02-23"}
    ledger.record(key, **metadata)

    with transaction.atomic():
        assert ledger.claim(key, **metadata) is None
        # Still able to query after the failed insert
        assert ledger.exists(key)


def test_claim_rolls_back_with_outer_transaction(user):
    ledger = DedupeLedger()
    key = digest_dedupe_key(user.pk, "2026-02-23")

    with pytest.raises(RuntimeError):
        with transaction.atomic():
            ledger.claim(key, reminder_type="daily_digest", user=user, digest_date="2026-02-23")
            raise RuntimeError("send failed")

    assert not ledger.exists(key)
