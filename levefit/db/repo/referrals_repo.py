from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.referrals import Referral


class ReferralsRepo:
    @staticmethod
    async def get_by_kiwify_order_id(session: AsyncSession, kiwify_order_id: str) -> Referral | None:
        stmt = select(Referral).where(Referral.kiwify_order_id == kiwify_order_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, *, referral: Referral) -> Referral:
        session.add(referral)
        await session.flush()
        return referral

    @staticmethod
    async def list_for_referrer(
        session: AsyncSession,
        *,
        referrer_id: UUID,
        limit: int = 100,
    ) -> list[Referral]:
        stmt = (
            select(Referral)
            .where(Referral.referrer_id == referrer_id)
            .order_by(Referral.created_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_by_id_for_update(session: AsyncSession, referral_id: UUID) -> Referral | None:
        stmt = select(Referral).where(Referral.id == referral_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_by_statuses(
        session: AsyncSession,
        *,
        statuses: tuple[str, ...],
        limit: int = 100,
    ) -> list[Referral]:
        stmt = (
            select(Referral)
            .where(Referral.status.in_(statuses))
            .order_by(Referral.created_at.asc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
