from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.affiliate_sales import AffiliateSale


class AffiliateSalesRepo:
    @staticmethod
    async def get_by_order_id(session: AsyncSession, order_id: str) -> AffiliateSale | None:
        stmt = select(AffiliateSale).where(AffiliateSale.order_id == order_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, *, sale: AffiliateSale) -> AffiliateSale:
        session.add(sale)
        await session.flush()
        return sale

    @staticmethod
    async def list_for_affiliate(
        session: AsyncSession,
        *,
        affiliate_id: UUID,
        limit: int = 50,
    ) -> list[AffiliateSale]:
        stmt = (
            select(AffiliateSale)
            .where(AffiliateSale.affiliate_id == affiliate_id)
            .order_by(AffiliateSale.created_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def aggregate_by_affiliate_between(
        session: AsyncSession,
        *,
        from_utc: datetime,
        to_utc: datetime,
    ) -> list[tuple[UUID, int, Decimal]]:
        commission_total = func.coalesce(func.sum(AffiliateSale.commission_amount), 0)
        stmt = (
            select(
                AffiliateSale.affiliate_id,
                func.count(AffiliateSale.id),
                commission_total,
            )
            .where(
                AffiliateSale.created_at >= from_utc,
                AffiliateSale.created_at < to_utc,
                AffiliateSale.status != "canceled",
            )
            .group_by(AffiliateSale.affiliate_id)
            .order_by(commission_total.desc())
        )
        result = await session.execute(stmt)
        return [
            (affiliate_id, int(sales_count), Decimal(commission))
            for affiliate_id, sales_count, commission in result.all()
        ]
