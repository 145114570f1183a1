from __future__ import annotations

from levefit.workers.asyncio_runner import run_async_job
from levefit.workers.celery_app import celery_app
from levefit.workers.tasks.wallet_expiration_async import run_wallet_expiration_async
from levefit.workers.tasks.wallet_expiration_schedule import configure_wallet_expiration_schedule

__all__ = [
    "run_wallet_expiration",
    "run_wallet_expiration_async",
]


@celery_app.task(name="levefit.workers.tasks.wallet_expiration.run_wallet_expiration")
def run_wallet_expiration() -> dict[str, object]:
    return run_async_job(run_wallet_expiration_async(), job_name="wallet_expiration")


configure_wallet_expiration_schedule(celery_app)
