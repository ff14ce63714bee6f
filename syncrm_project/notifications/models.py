from django.db import models
from django.conf import settings
from django.utils import timezone

from accounts.models import Organization
from leads.models import Activity


class ReminderEvent(models.Model):
    """
    Write-once ledger of reminder emails already delivered.

    The row's existence is the proof that a notification went out
    for its dedupe key. Rows are inserted by the reminder engine
    and never updated or deleted by it.
    """

    # =====================================================
    # REMINDER TYPE (one per scheduled pass)
    # =====================================================
    class ReminderType(models.TextChoices):
        PRE_START = "pre_start", "Pre-start"
        OVERDUE = "overdue", "Overdue"
        DAILY_DIGEST = "daily_digest", "Daily digest"

    # =====================================================
    # DEDUPE KEY (unique: the claim primitive)
    # =====================================================
    dedupe_key = models.CharField(
        max_length=255,
        unique=True,
        help_text="pre_start:<activity>, overdue:<activity> or daily_digest:<user>:<date>"
    )

    reminder_type = models.CharField(
        max_length=20,
        choices=ReminderType.choices,
        db_index=True
    )

    # =====================================================
    # CONTEXT
    # =====================================================
    activity = models.ForeignKey(
        Activity,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reminder_events"
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reminder_events"
    )

    organization = models.ForeignKey(
        Organization,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reminder_events"
    )

    # Local calendar date (YYYY-MM-DD) in the user's timezone
    digest_date = models.CharField(max_length=10, blank=True)

    sent_at = models.DateTimeField(
        default=timezone.now,
        db_index=True
    )

    # =====================================================
    # DJANGO META
    # =====================================================
    class Meta:
        ordering = ["-sent_at"]
        indexes = [
            models.Index(fields=["user", "reminder_type"], name="notificatio_user_id_3f0a8b_idx"),
        ]

    def __str__(self):
        return f"{self.dedupe_key} @ {self.sent_at:%Y-%m-%d %H:%M}"
