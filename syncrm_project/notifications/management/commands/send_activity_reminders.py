"""
notifications/management/commands/send_activity_reminders.py

Runs one or more reminder passes once.

Invoked by the in-process APScheduler jobs (notifications.scheduler)
or directly by an external cron. Every pass is idempotent: the
ReminderEvent ledger makes repeated runs safe.
"""

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from notifications.services.reminders import ReminderEngine


PASSES = ("pre_start", "overdue", "digest")


class Command(BaseCommand):
    help = "Send activity reminders (pre-start, overdue and daily digest passes)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--pass",
            dest="pass_name",
            choices=PASSES + ("all",),
            default="all",
            help="Which reminder pass to run (default: all)",
        )

    def handle(self, *args, **options):
        now = timezone.now()
        engine = ReminderEngine()

        runners = {
            "pre_start": engine.run_pre_start_pass,
            "overdue": engine.run_overdue_pass,
            "digest": engine.run_daily_digest_pass,
        }

        selected = PASSES if options["pass_name"] == "all" else (options["pass_name"],)

        self.stdout.write(
            self.style.NOTICE(
                f"[{now:%Y-%m-%d %H:%M:%S}] Starting activity reminders: "
                f"{', '.join(selected)}"
            )
        )

        failed_passes = []

        for name in selected:
            # A pass that cannot even select candidates must not
            # block the others; it is retried on the next tick.
            try:
                result = runners[name](now=now)
            except Exception as exc:
                failed_passes.append(name)
                self.stderr.write(
                    self.style.ERROR(f"[{name}] Could not run pass: {exc}")
                )
                continue

            self.stdout.write(
                self.style.SUCCESS(f"[{name}] Completed: {result.summary()}")
            )

        if failed_passes:
            raise CommandError(
                f"Reminder pass(es) failed: {', '.join(failed_passes)}"
            )
