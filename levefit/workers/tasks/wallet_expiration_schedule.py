from __future__ import annotations

from celery.schedules import crontab

from levefit.workers.tasks.wallet_expiration_config import (
    WALLET_EXPIRATION_HOUR,
    WALLET_EXPIRATION_MINUTE,
)


def configure_wallet_expiration_schedule(celery_app) -> None:
    celery_app.conf.beat_schedule = celery_app.conf.beat_schedule or {}
    celery_app.conf.beat_schedule.update(
        {
            "expire-wallet-credits-daily": {
                "task": "levefit.workers.tasks.wallet_expiration.run_wallet_expiration",
                "schedule": crontab(
                    hour=WALLET_EXPIRATION_HOUR,
                    minute=WALLET_EXPIRATION_MINUTE,
                ),
                "options": {"queue": "q_low"},
            },
        }
    )
