from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.pix_withdrawals import PixWithdrawal


class PixWithdrawalsRepo:
    @staticmethod
    async def sum_committed_for_affiliate(
        session: AsyncSession,
        *,
        affiliate_id: UUID,
        statuses: tuple[str, ...],
    ) -> Decimal:
        stmt = select(func.coalesce(func.sum(PixWithdrawal.amount), 0)).where(
            PixWithdrawal.affiliate_id == affiliate_id,
            PixWithdrawal.status.in_(statuses),
        )
        result = await session.execute(stmt)
        return Decimal(result.scalar_one())

    @staticmethod
    async def has_pending_for_affiliate(session: AsyncSession, *, affiliate_id: UUID) -> bool:
        stmt = (
            select(PixWithdrawal.id)
            .where(PixWithdrawal.affiliate_id == affiliate_id, PixWithdrawal.status == "pending")
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def get_by_id_for_update(
        session: AsyncSession,
        withdrawal_id: UUID,
    ) -> PixWithdrawal | None:
        stmt = select(PixWithdrawal).where(PixWithdrawal.id == withdrawal_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, *, withdrawal: PixWithdrawal) -> PixWithdrawal:
        session.add(withdrawal)
        await session.flush()
        return withdrawal

    @staticmethod
    async def list_for_affiliate(
        session: AsyncSession,
        *,
        affiliate_id: UUID,
        limit: int = 50,
    ) -> list[PixWithdrawal]:
        stmt = (
            select(PixWithdrawal)
            .where(PixWithdrawal.affiliate_id == affiliate_id)
            .order_by(PixWithdrawal.requested_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
