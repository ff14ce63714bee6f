"""
Notification service layer.

Each subpackage exposes functions that emit notifications for one
kind of trigger. Scheduling lives in notifications.scheduler and the
management commands; nothing here knows how often it is called.
"""

# =====================================================
# REMINDERS
# =====================================================
from .reminders import (
    send_pre_start_reminders,
    send_overdue_reminders,
    send_daily_digests,
)

# =====================================================
# PUBLIC EXPORTS
# =====================================================
__all__ = [
    "send_pre_start_reminders",
    "send_overdue_reminders",
    "send_daily_digests",
]
