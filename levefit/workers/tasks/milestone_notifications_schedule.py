from __future__ import annotations

from celery.schedules import crontab

from levefit.workers.tasks.milestone_notifications_config import (
    MILESTONE_PUSH_HOUR,
    MILESTONE_PUSH_MINUTE,
)


def configure_milestone_notifications_schedule(celery_app) -> None:
    celery_app.conf.beat_schedule = celery_app.conf.beat_schedule or {}
    celery_app.conf.beat_schedule.update(
        {
            "milestone-notifications-daily": {
                "task": "levefit.workers.tasks.milestone_notifications.run_milestone_notifications",
                "schedule": crontab(
                    hour=MILESTONE_PUSH_HOUR,
                    minute=MILESTONE_PUSH_MINUTE,
                ),
                "options": {"queue": "q_low"},
            },
        }
    )
