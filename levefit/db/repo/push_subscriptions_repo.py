from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, distinct, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.push_subscriptions import PushSubscription


class PushSubscriptionsRepo:
    @staticmethod
    async def list_for_user(session: AsyncSession, user_id: UUID) -> list[PushSubscription]:
        stmt = select(PushSubscription).where(PushSubscription.user_id == user_id)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_for_users(
        session: AsyncSession,
        user_ids: list[UUID],
    ) -> list[PushSubscription]:
        if not user_ids:
            return []
        stmt = select(PushSubscription).where(PushSubscription.user_id.in_(user_ids))
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_subscribed_user_ids(session: AsyncSession) -> list[UUID]:
        stmt = select(distinct(PushSubscription.user_id))
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def upsert(
        session: AsyncSession,
        *,
        user_id: UUID,
        endpoint: str,
        p256dh: str,
        auth: str,
        now_utc: datetime,
    ) -> None:
        stmt = insert(PushSubscription).values(
            user_id=user_id,
            endpoint=endpoint,
            p256dh=p256dh,
            auth=auth,
            created_at=now_utc,
            updated_at=now_utc,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[PushSubscription.endpoint],
            set_={
                "user_id": stmt.excluded.user_id,
                "p256dh": stmt.excluded.p256dh,
                "auth": stmt.excluded.auth,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await session.execute(stmt)

    @staticmethod
    async def delete_by_endpoint(
        session: AsyncSession,
        *,
        endpoint: str,
        user_id: UUID | None = None,
    ) -> int:
        stmt = delete(PushSubscription).where(PushSubscription.endpoint == endpoint)
        if user_id is not None:
            stmt = stmt.where(PushSubscription.user_id == user_id)
        result = await session.execute(stmt)
        return int(result.rowcount or 0)

    @staticmethod
    async def delete_by_ids(session: AsyncSession, subscription_ids: list[UUID]) -> int:
        if not subscription_ids:
            return 0
        stmt = delete(PushSubscription).where(PushSubscription.id.in_(subscription_ids))
        result = await session.execute(stmt)
        return int(result.rowcount or 0)
