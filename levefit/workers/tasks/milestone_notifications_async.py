from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

import structlog

from levefit.core.local_time import local_date
from levefit.db.session import SessionLocal
from levefit.economy.notifications.service import NotificationService
from levefit.workers.tasks.milestone_notifications_config import MILESTONE_PUSH_BATCH_SIZE

logger = structlog.get_logger("levefit.workers.tasks.milestone_notifications")


async def run_milestone_notifications_async(
    *,
    batch_size: int = MILESTONE_PUSH_BATCH_SIZE,
) -> dict[str, object]:
    now_utc = datetime.now(timezone.utc)
    today = local_date(now_utc)
    resolved_batch_size = max(1, int(batch_size))

    users_matched = 0
    sent_total = 0
    skipped_total = 0
    last_user_id: UUID | None = None
    while True:
        async with SessionLocal.begin() as session:
            batch = await NotificationService.send_milestone_batch(
                session,
                today=today,
                now_utc=now_utc,
                after_user_id=last_user_id,
                batch_size=resolved_batch_size,
            )
        if batch.last_user_id is None:
            break
        users_matched += batch.users_matched
        sent_total += batch.sent
        skipped_total += batch.skipped
        last_user_id = batch.last_user_id

    result: dict[str, object] = {
        "date": today.isoformat(),
        "users_matched": users_matched,
        "sent_total": sent_total,
        "skipped_total": skipped_total,
    }
    logger.info("milestone_notifications_finished", **result)
    return result
