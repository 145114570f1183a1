from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.points_history import PointsHistory
from levefit.db.models.redeemed_rewards import RedeemedReward
from levefit.db.models.rewards import Reward
from levefit.db.models.user_points import UserPoints


class PointsRepo:
    @staticmethod
    async def get_balance(session: AsyncSession, user_id: UUID) -> UserPoints | None:
        stmt = select(UserPoints).where(UserPoints.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_balance_for_update(session: AsyncSession, user_id: UUID) -> UserPoints | None:
        stmt = select(UserPoints).where(UserPoints.user_id == user_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_reward(session: AsyncSession, reward_id: UUID) -> Reward | None:
        stmt = select(Reward).where(Reward.id == reward_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_active_rewards(session: AsyncSession) -> list[Reward]:
        stmt = select(Reward).where(Reward.is_active.is_(True)).order_by(Reward.points_cost.asc())
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_history(
        session: AsyncSession,
        *,
        user_id: UUID,
        limit: int = 50,
    ) -> list[PointsHistory]:
        stmt = (
            select(PointsHistory)
            .where(PointsHistory.user_id == user_id)
            .order_by(PointsHistory.created_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def add_history(session: AsyncSession, *, entry: PointsHistory) -> PointsHistory:
        session.add(entry)
        await session.flush()
        return entry

    @staticmethod
    async def add_redemption(
        session: AsyncSession,
        *,
        redemption: RedeemedReward,
    ) -> RedeemedReward:
        session.add(redemption)
        await session.flush()
        return redemption
