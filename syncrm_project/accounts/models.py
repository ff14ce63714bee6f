from django.db import models
from django.contrib.auth.models import AbstractUser


class Organization(models.Model):
    name = models.CharField(max_length=150, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name


class User(AbstractUser):
    """
    Tenant member.

    `email` and `is_active` come from AbstractUser. An empty
    `timezone` means the user's local time is UTC.
    """

    class Role(models.TextChoices):
        ADMIN = "admin", "Admin"
        AGENT = "agent", "Agent"

    full_name = models.CharField(max_length=200, blank=True)
    name = models.CharField(max_length=150, blank=True)

    timezone = models.CharField(
        max_length=64,
        blank=True,
        help_text="IANA timezone, e.g. Africa/Harare. Blank means UTC."
    )

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.AGENT,
    )

    organization = models.ForeignKey(
        Organization,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="users"
    )

    def __str__(self):
        full = self.full_name or self.get_full_name()
        return f"{full} ({self.username})" if full else self.username
