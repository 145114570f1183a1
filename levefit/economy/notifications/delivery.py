from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.repo.push_subscriptions_repo import PushSubscriptionsRepo
from levefit.services.web_push import PushMessage, PushTarget, send_web_push

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class DeliveryCounts:
    sent: int = 0
    failed: int = 0
    removed_subscriptions: int = 0
    delivered_user_ids: set[UUID] = field(default_factory=set)


async def deliver_to_users(
    session: AsyncSession,
    *,
    messages: Mapping[UUID, PushMessage],
) -> DeliveryCounts:
    """Sends each user's message to all of their subscriptions.

    Subscriptions the push service reports as gone (404/410) are deleted.
    """
    counts = DeliveryCounts()
    if not messages:
        return counts

    subscriptions = await PushSubscriptionsRepo.list_for_users(session, list(messages))
    gone_ids: list[UUID] = []
    for subscription in subscriptions:
        message = messages[subscription.user_id]
        result = await send_web_push(
            PushTarget(
                endpoint=subscription.endpoint,
                p256dh=subscription.p256dh,
                auth=subscription.auth,
            ),
            message,
        )
        if result.delivered:
            counts.sent += 1
            counts.delivered_user_ids.add(subscription.user_id)
            continue
        counts.failed += 1
        if result.gone:
            gone_ids.append(subscription.id)

    if gone_ids:
        counts.removed_subscriptions = await PushSubscriptionsRepo.delete_by_ids(session, gone_ids)
        logger.info("push_subscriptions_removed_gone", removed=counts.removed_subscriptions)
    return counts
