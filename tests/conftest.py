from datetime import datetime, timedelta, timezone as dt_timezone
from itertools import count

import pytest

from accounts.models import Organization, User
from leads.models import Activity, Lead


# Monday 2026-02-23, 12:00 UTC
NOW = datetime(2026, 2, 23, 12, 0, tzinfo=dt_timezone.utc)

# 08:05 UTC on the same day: inside the UTC digest window
DIGEST_NOW = datetime(2026, 2, 23, 8, 5, tzinfo=dt_timezone.utc)


_seq = count(1)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def organization(db):
    return Organization.objects.create(name="Harare Realty")


@pytest.fixture
def make_user(db, organization):
    def _make_user(**kwargs):
        n = next(_seq)
        kwargs.setdefault("username", f"agent{n}")
        kwargs.setdefault("email", f"agent{n}@example.com")
        kwargs.setdefault("full_name", f"Agent {n}")
        kwargs.setdefault("organization", organization)
        return User.objects.create(**kwargs)

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user(username="alice", email="alice@example.com", full_name="Alice Moyo")


@pytest.fixture
def make_lead(db, organization):
    def _make_lead(owner, **kwargs):
        n = next(_seq)
        kwargs.setdefault("full_name", f"Lead {n}")
        kwargs.setdefault("phone", f"+26377100{n:04d}")
        return Lead.objects.create(owner=owner, organization=organization, **kwargs)

    return _make_lead


@pytest.fixture
def make_activity(db, organization, make_lead):
    def _make_activity(assigned_to, scheduled_at, **kwargs):
        lead = kwargs.pop("lead", None) or make_lead(assigned_to)
        kwargs.setdefault("type", Activity.Type.CALL)
        kwargs.setdefault("title", "Follow-up call")
        kwargs.setdefault("status", Activity.Status.TODO)
        return Activity.objects.create(
            lead=lead,
            assigned_to=assigned_to,
            scheduled_at=scheduled_at,
            organization=organization,
            **kwargs,
        )

    return _make_activity


def minutes(n):
    return timedelta(minutes=n)
