from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.wallet_transactions import WalletTransaction


class WalletTransactionsRepo:
    @staticmethod
    async def get_by_idempotency_key(
        session: AsyncSession,
        idempotency_key: str,
    ) -> WalletTransaction | None:
        stmt = select(WalletTransaction).where(WalletTransaction.idempotency_key == idempotency_key)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        transaction: WalletTransaction,
    ) -> WalletTransaction:
        session.add(transaction)
        await session.flush()
        return transaction

    @staticmethod
    async def list_for_wallet(
        session: AsyncSession,
        *,
        wallet_id: UUID,
        limit: int = 100,
    ) -> list[WalletTransaction]:
        stmt = (
            select(WalletTransaction)
            .where(WalletTransaction.wallet_id == wallet_id)
            .order_by(WalletTransaction.created_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def exists_since(
        session: AsyncSession,
        *,
        wallet_id: UUID,
        since_utc: datetime,
    ) -> bool:
        stmt = (
            select(WalletTransaction.id)
            .where(
                WalletTransaction.wallet_id == wallet_id,
                WalletTransaction.created_at >= since_utc,
            )
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def sum_for_wallet(session: AsyncSession, *, wallet_id: UUID) -> Decimal:
        stmt = select(func.coalesce(func.sum(WalletTransaction.amount), 0)).where(
            WalletTransaction.wallet_id == wallet_id
        )
        result = await session.execute(stmt)
        return Decimal(result.scalar_one())
