from __future__ import annotations

from celery.schedules import crontab

from levefit.economy.notifications.constants import (
    NOTIFICATION_TYPE_CAPSULE,
    NOTIFICATION_TYPE_DAILY_SUMMARY,
    NOTIFICATION_TYPE_TREATMENT_END,
    NOTIFICATION_TYPE_WATER,
)
from levefit.workers.tasks.reminders_config import (
    CAPSULE_REMINDER_INTERVAL_SECONDS,
    DAILY_SUMMARY_PUSH_HOUR,
    TREATMENT_END_PUSH_HOUR,
)

REMINDER_TASK_NAME = "levefit.workers.tasks.reminders.run_push_reminder"


def configure_reminders_schedule(celery_app) -> None:
    celery_app.conf.beat_schedule = celery_app.conf.beat_schedule or {}
    celery_app.conf.beat_schedule.update(
        {
            "capsule-reminders-every-5-minutes": {
                "task": REMINDER_TASK_NAME,
                "schedule": CAPSULE_REMINDER_INTERVAL_SECONDS,
                "args": (NOTIFICATION_TYPE_CAPSULE,),
                "options": {"queue": "q_normal"},
            },
            "water-reminders-hourly": {
                "task": REMINDER_TASK_NAME,
                "schedule": crontab(minute=0),
                "args": (NOTIFICATION_TYPE_WATER,),
                "options": {"queue": "q_normal"},
            },
            "treatment-end-reminders-daily": {
                "task": REMINDER_TASK_NAME,
                "schedule": crontab(hour=TREATMENT_END_PUSH_HOUR, minute=0),
                "args": (NOTIFICATION_TYPE_TREATMENT_END,),
                "options": {"queue": "q_low"},
            },
            "daily-summary-daily": {
                "task": REMINDER_TASK_NAME,
                "schedule": crontab(hour=DAILY_SUMMARY_PUSH_HOUR, minute=0),
                "args": (NOTIFICATION_TYPE_DAILY_SUMMARY,),
                "options": {"queue": "q_low"},
            },
        }
    )
