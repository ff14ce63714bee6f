import pytest

from notifications import scheduler


class FakeScheduler:
    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.jobs = {}
        self.started = False

    def add_job(self, func, **kwargs):
        self.jobs[kwargs["id"]] = (func, kwargs)

    def start(self):
        self.started = True

    def shutdown(self, wait=True):
        self.started = False


@pytest.fixture
def fake_scheduler(monkeypatch):
    monkeypatch.setattr(scheduler, "_scheduler", None)
    monkeypatch.setattr(scheduler, "BackgroundScheduler", FakeScheduler)


def test_disabled_scheduler_does_not_start(settings, fake_scheduler):
    settings.ENABLE_SCHEDULER = False

    assert scheduler.start_scheduler() is None
    assert scheduler._scheduler is None


def test_scheduler_registers_one_job_per_pass(settings, fake_scheduler):
    settings.ENABLE_SCHEDULER = True
    settings.REMINDER_PRE_START_INTERVAL_MINUTES = 5
    settings.REMINDER_OVERDUE_INTERVAL_MINUTES = 10
    settings.REMINDER_DIGEST_INTERVAL_MINUTES = 15

    started = scheduler.start_scheduler()

    assert started.started
    assert set(started.jobs) == set(scheduler.REMINDER_JOBS)

    func, job = started.jobs["activity_overdue_reminders"]
    assert func is scheduler.run_reminder_pass
    assert job["args"] == ["overdue"]
    assert job["minutes"] == 10
    assert job["max_instances"] == 1
    assert job["coalesce"] is True

    assert started.jobs["activity_daily_digest"][1]["minutes"] == 15

    # Second call returns the running instance
    assert scheduler.start_scheduler() is started

    scheduler.shutdown_scheduler()
    assert scheduler._scheduler is None
    assert not started.started


def test_job_delegates_to_management_command(monkeypatch):
    calls = []
    monkeypatch.setattr(
        scheduler, "call_command", lambda *args, **kwargs: calls.append((args, kwargs))
    )

    scheduler.run_reminder_pass("digest")

    assert calls == [(("send_activity_reminders",), {"pass_name": "digest"})]
