from __future__ import annotations

from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.repo.push_subscriptions_repo import PushSubscriptionsRepo

logger = structlog.get_logger(__name__)


class PushSubscriptionService:
    @staticmethod
    async def save(
        session: AsyncSession,
        *,
        user_id: UUID,
        endpoint: str,
        p256dh: str,
        auth: str,
        now_utc: datetime,
    ) -> None:
        await PushSubscriptionsRepo.upsert(
            session,
            user_id=user_id,
            endpoint=endpoint,
            p256dh=p256dh,
            auth=auth,
            now_utc=now_utc,
        )
        logger.info("push_subscription_saved", user_id=str(user_id))

    @staticmethod
    async def remove(session: AsyncSession, *, user_id: UUID, endpoint: str) -> bool:
        removed = await PushSubscriptionsRepo.delete_by_endpoint(
            session,
            endpoint=endpoint,
            user_id=user_id,
        )
        return removed > 0
