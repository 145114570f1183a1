from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.affiliates import Affiliate


class AffiliatesRepo:
    @staticmethod
    async def get_by_user_id(session: AsyncSession, user_id: UUID) -> Affiliate | None:
        stmt = select(Affiliate).where(Affiliate.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_user_id_for_update(session: AsyncSession, user_id: UUID) -> Affiliate | None:
        stmt = select(Affiliate).where(Affiliate.user_id == user_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_code_for_update(session: AsyncSession, affiliate_code: str) -> Affiliate | None:
        stmt = select(Affiliate).where(Affiliate.affiliate_code == affiliate_code).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def code_exists(session: AsyncSession, affiliate_code: str) -> bool:
        stmt = select(Affiliate.id).where(Affiliate.affiliate_code == affiliate_code).limit(1)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def create(session: AsyncSession, *, affiliate: Affiliate) -> Affiliate:
        session.add(affiliate)
        await session.flush()
        return affiliate

    @staticmethod
    async def list_by_ids(session: AsyncSession, affiliate_ids: list[UUID]) -> list[Affiliate]:
        if not affiliate_ids:
            return []
        stmt = select(Affiliate).where(Affiliate.id.in_(affiliate_ids))
        result = await session.execute(stmt)
        return list(result.scalars().all())
