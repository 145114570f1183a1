from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.points_history import PointsHistory
from levefit.db.models.redeemed_rewards import RedeemedReward
from levefit.db.models.rewards import Reward
from levefit.db.repo.points_repo import PointsRepo
from levefit.economy.points.errors import InsufficientPointsError, RewardNotFoundError

logger = structlog.get_logger(__name__)

REDEMPTION_ACTION = "redemption"
REDEMPTION_DESCRIPTION_TEMPLATE = "Resgatou: {name}"
HISTORY_LIMIT = 50


@dataclass(frozen=True, slots=True)
class PointsOverview:
    points: int
    history: list[PointsHistory]
    rewards: list[Reward]


@dataclass(frozen=True, slots=True)
class RedemptionResult:
    redemption_id: UUID
    remaining_points: int


class PointsService:
    @staticmethod
    async def get_overview(session: AsyncSession, *, user_id: UUID) -> PointsOverview:
        balance = await PointsRepo.get_balance(session, user_id)
        return PointsOverview(
            points=balance.points if balance is not None else 0,
            history=await PointsRepo.list_history(session, user_id=user_id, limit=HISTORY_LIMIT),
            rewards=await PointsRepo.list_active_rewards(session),
        )

    @staticmethod
    async def redeem_reward(
        session: AsyncSession,
        *,
        user_id: UUID,
        reward_id: UUID,
        now_utc: datetime,
    ) -> RedemptionResult:
        reward = await PointsRepo.get_reward(session, reward_id)
        if reward is None or not reward.is_active:
            raise RewardNotFoundError

        balance = await PointsRepo.get_balance_for_update(session, user_id)
        if balance is None or balance.points < reward.points_cost:
            raise InsufficientPointsError

        balance.points -= reward.points_cost
        balance.updated_at = now_utc
        await PointsRepo.add_history(
            session,
            entry=PointsHistory(
                user_id=user_id,
                action=REDEMPTION_ACTION,
                points=-reward.points_cost,
                description=REDEMPTION_DESCRIPTION_TEMPLATE.format(name=reward.name),
                created_at=now_utc,
            ),
        )
        redemption = await PointsRepo.add_redemption(
            session,
            redemption=RedeemedReward(user_id=user_id, reward_id=reward.id, redeemed_at=now_utc),
        )

        logger.info(
            "points_reward_redeemed",
            user_id=str(user_id),
            reward_id=str(reward.id),
            points_cost=reward.points_cost,
        )
        return RedemptionResult(redemption_id=redemption.id, remaining_points=balance.points)
