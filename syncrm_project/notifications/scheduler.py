from apscheduler.schedulers.background import BackgroundScheduler
from django.conf import settings
from django.core.management import call_command
from django.utils import timezone
import logging

logger = logging.getLogger(__name__)

# ============================================================
# GLOBAL SAFETY LOCK
# Prevents scheduler from starting more than once
# ============================================================
_scheduler = None


# job id -> (command pass, settings key for the interval, default minutes)
REMINDER_JOBS = {
    "activity_pre_start_reminders": (
        "pre_start", "REMINDER_PRE_START_INTERVAL_MINUTES", 5,
    ),
    "activity_overdue_reminders": (
        "overdue", "REMINDER_OVERDUE_INTERVAL_MINUTES", 5,
    ),
    "activity_daily_digest": (
        "digest", "REMINDER_DIGEST_INTERVAL_MINUTES", 15,
    ),
}


def start_scheduler():
    """
    Start APScheduler safely.

    - Respects ENABLE_SCHEDULER setting
    - Prevents double start (Django autoreload, imports)
    - One job per reminder pass, never overlapping with itself
    """
    global _scheduler

    # --------------------------------------------
    # DEV / PROD TOGGLE
    # --------------------------------------------
    if not getattr(settings, "ENABLE_SCHEDULER", False):
        logger.info("APScheduler disabled via settings (ENABLE_SCHEDULER=False)")
        return None

    # --------------------------------------------
    # SAFETY LOCK (NO DOUBLE START)
    # --------------------------------------------
    if _scheduler is not None:
        logger.info("APScheduler already running, skipping initialization")
        return _scheduler

    logger.info("Starting APScheduler...")

    _scheduler = BackgroundScheduler(
        timezone=settings.TIME_ZONE
    )

    # --------------------------------------------
    # SCHEDULE: ONE INTERVAL JOB PER PASS
    # --------------------------------------------
    for job_id, (pass_name, setting_name, default_minutes) in REMINDER_JOBS.items():
        minutes = getattr(settings, setting_name, default_minutes)

        _scheduler.add_job(
            run_reminder_pass,
            trigger="interval",
            minutes=minutes,
            args=[pass_name],
            id=job_id,
            replace_existing=True,
            max_instances=1,      # Same pass never overlaps itself
            coalesce=True,        # Merge missed runs if server was down
        )

        logger.info("Scheduled %s every %s minutes", job_id, minutes)

    _scheduler.start()

    logger.info("APScheduler started with %s reminder jobs", len(REMINDER_JOBS))
    return _scheduler


def shutdown_scheduler():
    global _scheduler

    if _scheduler is None:
        return

    _scheduler.shutdown(wait=False)
    _scheduler = None
    logger.info("APScheduler stopped")


def run_reminder_pass(pass_name):
    """
    Wrapper job that calls the Django management command.
    Keeps all business logic out of the scheduler.
    """
    now = timezone.now()
    logger.info(f"Running scheduled {pass_name} reminders at {now:%Y-%m-%d %H:%M:%S}")

    call_command("send_activity_reminders", pass_name=pass_name)
