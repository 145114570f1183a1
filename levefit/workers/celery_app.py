from celery import Celery
from celery.signals import setup_logging

from levefit.core.config import get_settings
from levefit.core.logging import configure_logging

settings = get_settings()

celery_app = Celery(
    "levefit",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        "levefit.workers.tasks.wallet_expiration",
        "levefit.workers.tasks.milestone_notifications",
        "levefit.workers.tasks.reminders",
    ],
)

celery_app.conf.update(
    task_default_queue="q_normal",
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone=settings.scheduler_timezone,
    enable_utc=True,
)


@setup_logging.connect
def _configure_worker_logging(**kwargs) -> None:
    configure_logging(settings.log_level, json_logs=settings.app_env != "dev")


@celery_app.task(name="levefit.workers.celery_app.ping")
def ping() -> str:
    return "pong"
