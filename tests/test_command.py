from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.utils import timezone

from notifications.models import ReminderEvent
from notifications.services.reminders import ReminderEngine


def test_command_runs_selected_pass(user, make_activity, mailoutbox):
    activity = make_activity(user, timezone.now() + timedelta(minutes=60))
    out = StringIO()

    call_command("send_activity_reminders", "--pass", "pre_start", stdout=out)

    output = out.getvalue()
    assert "[pre_start] Completed: sent=1 skipped=0 failed=0" in output
    assert "[overdue]" not in output
    assert len(mailoutbox) == 1
    assert ReminderEvent.objects.get().activity == activity


def test_command_runs_all_passes_by_default(db):
    out = StringIO()

    call_command("send_activity_reminders", stdout=out)

    output = out.getvalue()
    for name in ("pre_start", "overdue", "digest"):
        assert f"[{name}] Completed" in output


def test_failing_pass_does_not_block_others(db, monkeypatch):
    def broken(self, now=None):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(ReminderEngine, "run_overdue_pass", broken)
    out, err = StringIO(), StringIO()

    with pytest.raises(CommandError, match="overdue"):
        call_command("send_activity_reminders", stdout=out, stderr=err)

    assert "[pre_start] Completed" in out.getvalue()
    assert "[digest] Completed" in out.getvalue()
    assert "database unavailable" in err.getvalue()
