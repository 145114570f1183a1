from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.wallets import Wallet


class WalletsRepo:
    @staticmethod
    async def get_by_user_id(session: AsyncSession, user_id: UUID) -> Wallet | None:
        stmt = select(Wallet).where(Wallet.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_user_id_for_update(session: AsyncSession, user_id: UUID) -> Wallet | None:
        stmt = select(Wallet).where(Wallet.user_id == user_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_id_for_update(session: AsyncSession, wallet_id: UUID) -> Wallet | None:
        stmt = select(Wallet).where(Wallet.id == wallet_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_referral_code_for_update(
        session: AsyncSession,
        referral_code: str,
    ) -> Wallet | None:
        stmt = select(Wallet).where(Wallet.referral_code == referral_code).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def referral_code_exists(session: AsyncSession, referral_code: str) -> bool:
        stmt = select(Wallet.id).where(Wallet.referral_code == referral_code).limit(1)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def create_if_absent(
        session: AsyncSession,
        *,
        user_id: UUID,
        referral_code: str,
        now_utc: datetime,
    ) -> bool:
        stmt = (
            insert(Wallet)
            .values(
                user_id=user_id,
                referral_code=referral_code,
                balance=0,
                created_at=now_utc,
                updated_at=now_utc,
            )
            .on_conflict_do_nothing(index_elements=[Wallet.user_id])
            .returning(Wallet.id)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def list_expiration_candidate_ids(
        session: AsyncSession,
        *,
        updated_before_utc: datetime,
        after_wallet_id: UUID | None = None,
        limit: int = 500,
    ) -> list[UUID]:
        stmt = (
            select(Wallet.id)
            .where(Wallet.balance > 0, Wallet.updated_at < updated_before_utc)
            .order_by(Wallet.id.asc())
            .limit(limit)
        )
        if after_wallet_id is not None:
            stmt = stmt.where(Wallet.id > after_wallet_id)
        result = await session.execute(stmt)
        return list(result.scalars().all())
