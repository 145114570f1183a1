from __future__ import annotations

from levefit.workers.asyncio_runner import run_async_job
from levefit.workers.celery_app import celery_app
from levefit.workers.tasks.milestone_notifications_async import run_milestone_notifications_async
from levefit.workers.tasks.milestone_notifications_config import MILESTONE_PUSH_BATCH_SIZE
from levefit.workers.tasks.milestone_notifications_schedule import (
    configure_milestone_notifications_schedule,
)

__all__ = [
    "run_milestone_notifications",
    "run_milestone_notifications_async",
]


@celery_app.task(name="levefit.workers.tasks.milestone_notifications.run_milestone_notifications")
def run_milestone_notifications(batch_size: int = MILESTONE_PUSH_BATCH_SIZE) -> dict[str, object]:
    return run_async_job(
        run_milestone_notifications_async(batch_size=batch_size),
        job_name="milestone_notifications",
    )


configure_milestone_notifications_schedule(celery_app)
