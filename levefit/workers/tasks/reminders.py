from __future__ import annotations

from levefit.workers.asyncio_runner import run_async_job
from levefit.workers.celery_app import celery_app
from levefit.workers.tasks.reminders_async import run_push_reminder_async
from levefit.workers.tasks.reminders_schedule import configure_reminders_schedule

__all__ = [
    "run_push_reminder",
    "run_push_reminder_async",
]


@celery_app.task(name="levefit.workers.tasks.reminders.run_push_reminder")
def run_push_reminder(notification_type: str) -> dict[str, object]:
    return run_async_job(
        run_push_reminder_async(notification_type),
        job_name=f"push_reminder_{notification_type}",
    )


configure_reminders_schedule(celery_app)
