from django.db import models
from django.conf import settings
from django.utils import timezone

from accounts.models import Organization


class Lead(models.Model):
    full_name = models.CharField(max_length=200)
    phone = models.CharField(max_length=32, blank=True)
    email = models.EmailField(blank=True)

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="owned_leads"
    )

    organization = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="leads"
    )

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.full_name


class Activity(models.Model):
    """
    A schedulable unit of work against a lead.

    Activities are created and edited by the CRM surface; the
    reminder engine only ever reads them.
    """

    class Type(models.TextChoices):
        CALL = "call", "Call"
        WHATSAPP = "whatsapp", "WhatsApp"
        EMAIL = "email", "Email"
        MEETING = "meeting", "Meeting"
        VIEWING = "viewing", "Viewing"
        NOTE = "note", "Note"

    class Status(models.TextChoices):
        TODO = "todo", "To Do"
        COMPLETED = "completed", "Completed"

    lead = models.ForeignKey(
        Lead,
        on_delete=models.CASCADE,
        related_name="activities"
    )

    type = models.CharField(
        max_length=20,
        choices=Type.choices,
        db_index=True
    )

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    scheduled_at = models.DateTimeField(null=True, blank=True)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.TODO,
        db_index=True
    )

    completed_at = models.DateTimeField(null=True, blank=True)
    completion_notes = models.TextField(blank=True)

    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="assigned_activities"
    )

    organization = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="activities"
    )

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name_plural = "activities"
        ordering = ["scheduled_at"]
        indexes = [
            models.Index(fields=["status", "scheduled_at"], name="leads_activ_status_4b1c2e_idx"),
            models.Index(fields=["assigned_to", "scheduled_at"], name="leads_activ_assigne_9a7d31_idx"),
        ]

    def __str__(self):
        return f"{self.get_type_display()}: {self.title}"

    @property
    def is_closed(self):
        return self.status == self.Status.COMPLETED
