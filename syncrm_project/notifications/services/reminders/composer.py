"""
notifications/services/reminders/composer.py

Renders reminder emails.

Each message is built from ONE context dict that feeds both the HTML
and the plain-text template, so the two bodies can only differ in
markup, never in content.
"""

from dataclasses import dataclass
from datetime import timedelta

from django.template.loader import render_to_string

from leads.models import Activity

from .timewindow import format_date, format_datetime, format_time


ACTIVITY_TYPE_LABELS = {
    "call": "Call",
    "whatsapp": "WhatsApp",
    "email": "Email",
    "meeting": "Meeting",
    "viewing": "Viewing",
    "note": "Note",
}

UNKNOWN_LEAD = "Unknown"


@dataclass(frozen=True)
class ComposedMessage:
    subject: str
    html: str
    text: str


# ============================================================
# DISPLAY HELPERS
# ============================================================

def display_name(user):
    """
    Best available greeting name:
    full_name -> name -> email local part -> "there"
    """
    if user.full_name:
        return user.full_name
    if user.name:
        return user.name
    if user.email:
        local_part = user.email.split("@")[0]
        if local_part:
            return local_part
    return "there"


def activity_type_label(activity_type):
    return ACTIVITY_TYPE_LABELS.get(activity_type, activity_type)


def header_text(value):
    """Collapse line breaks and runs of whitespace; mail headers are one line."""
    return " ".join(value.split())


def _render(template_base, context):
    return (
        render_to_string(f"notifications/email/{template_base}.html", context),
        render_to_string(f"notifications/email/{template_base}.txt", context),
    )


def _activity_context(activity, user, lead, tz):
    type_label = activity_type_label(activity.type)

    return {
        "user_name": display_name(user),
        "activity_title": activity.title,
        "type_label": type_label,
        "type_label_lower": type_label.lower(),
        "time_str": format_time(activity.scheduled_at, tz),
        "datetime_str": format_datetime(activity.scheduled_at, tz),
        "lead_name": lead.full_name if lead else UNKNOWN_LEAD,
        "lead_phone": lead.phone if lead else "",
        "timezone": tz,
    }


# ============================================================
# PRE-START (ONE HOUR BEFORE)
# ============================================================

def compose_pre_start(activity, user, lead, tz):
    context = _activity_context(activity, user, lead, tz)

    subject = (
        f'Reminder: {context["type_label"]} '
        f'"{header_text(activity.title)}" starts in 1 hour'
    )
    html, text = _render("pre_start", context)

    return ComposedMessage(subject=subject, html=html, text=text)


# ============================================================
# OVERDUE (STILL OPEN AFTER START)
# ============================================================

def compose_overdue(activity, user, lead, tz):
    context = _activity_context(activity, user, lead, tz)

    subject = (
        f'Follow-up needed: {context["type_label"]} '
        f'"{header_text(activity.title)}" is overdue'
    )
    html, text = _render("overdue", context)

    return ComposedMessage(subject=subject, html=html, text=text)


# ============================================================
# DAILY DIGEST
# ============================================================

def digest_item(activity, tz):
    lead = getattr(activity, "digest_lead", None)

    return {
        "time_str": format_time(activity.scheduled_at, tz),
        "type_label": activity_type_label(activity.type),
        "title": activity.title,
        "lead_name": lead.full_name if lead else UNKNOWN_LEAD,
        "lead_phone": lead.phone if lead else "",
        "is_completed": activity.status == Activity.Status.COMPLETED,
        "status_label": activity.get_status_display(),
    }


def compose_digest(user, tz, day_start, activities):
    """
    ``activities`` must be non-empty, already sorted by scheduled_at,
    and carry ``digest_lead`` (see eligibility.digest_activities).
    Empty days are recorded by the engine and never rendered.
    """
    items = [digest_item(activity, tz) for activity in activities]

    completed_count = sum(1 for item in items if item["is_completed"])
    todo_count = len(items) - completed_count

    # Noon keeps the label on the right calendar day across DST shifts
    date_label = format_date(day_start + timedelta(hours=12), tz)

    context = {
        "user_name": display_name(user),
        "date_label": date_label,
        "items": items,
        "todo_count": todo_count,
        "completed_count": completed_count,
        "total_count": len(items),
        "timezone": tz,
    }

    task_word = "task" if todo_count == 1 else "tasks"
    subject = f"Your daily agenda for {date_label}: {todo_count} {task_word} scheduled"
    html, text = _render("daily_digest", context)

    return ComposedMessage(subject=subject, html=html, text=text)
