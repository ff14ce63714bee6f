import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
        ("leads", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ReminderEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("dedupe_key", models.CharField(help_text="pre_start:<activity>, overdue:<activity> or daily_digest:<user>:<date>", max_length=255, unique=True)),
                ("reminder_type", models.CharField(choices=[("pre_start", "Pre-start"), ("overdue", "Overdue"), ("daily_digest", "Daily digest")], db_index=True, max_length=20)),
                ("digest_date", models.CharField(blank=True, max_length=10)),
                ("sent_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("activity", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="reminder_events", to="leads.activity")),
                ("organization", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="reminder_events", to="accounts.organization")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="reminder_events", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-sent_at"],
                "indexes": [
                    models.Index(fields=["user", "reminder_type"], name="notificatio_user_id_3f0a8b_idx"),
                ],
            },
        ),
    ]
