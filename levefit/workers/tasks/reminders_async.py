from __future__ import annotations

from datetime import datetime, timezone

import structlog

from levefit.db.session import SessionLocal
from levefit.economy.notifications.constants import BULK_NOTIFICATION_TYPES
from levefit.economy.notifications.service import NotificationService

logger = structlog.get_logger("levefit.workers.tasks.reminders")


async def run_push_reminder_async(notification_type: str) -> dict[str, object]:
    if notification_type not in BULK_NOTIFICATION_TYPES:
        raise ValueError(f"unsupported reminder type: {notification_type}")

    now_utc = datetime.now(timezone.utc)
    async with SessionLocal.begin() as session:
        outcome = await NotificationService.send(
            session,
            notification_type=notification_type,
            target_user_id=None,
            now_utc=now_utc,
        )

    result: dict[str, object] = {
        "notification_type": notification_type,
        "generated_at": now_utc.isoformat(),
        "target_users": outcome.target_users,
        "sent": outcome.sent,
        "failed": outcome.failed,
    }
    logger.info("push_reminder_finished", **result)
    return result
