from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.repo.habits_repo import HabitsRepo
from levefit.db.repo.profiles_repo import ProfilesRepo
from levefit.economy.goal_progress.constants import FINAL_TARGETS
from levefit.economy.goal_progress.rules import calculate_goal_progress
from levefit.economy.goal_progress.types import GoalProgressCounts, GoalProgressResult
from levefit.economy.habits.constants import DEFAULT_WATER_GOAL_ML


@dataclass(frozen=True, slots=True)
class GoalProgressSnapshot:
    counts: GoalProgressCounts
    targets: dict[str, int]
    result: GoalProgressResult


class GoalProgressService:
    @staticmethod
    async def load_counts(session: AsyncSession, *, user_id: UUID) -> GoalProgressCounts:
        profile = await ProfilesRepo.get_by_user_id(session, user_id)
        water_goal = profile.water_goal if profile is not None and profile.water_goal else None

        return GoalProgressCounts(
            capsule=await HabitsRepo.count_capsule_days(session, user_id=user_id),
            hydration=await HabitsRepo.count_hydration_days(
                session,
                user_id=user_id,
                water_goal=water_goal or DEFAULT_WATER_GOAL_ML,
            ),
            exercise=await HabitsRepo.count_completed(session, kind="exercise", user_id=user_id),
            recipe=await HabitsRepo.count_completed(session, kind="recipe", user_id=user_id),
            detox=await HabitsRepo.count_completed(session, kind="detox", user_id=user_id),
        )

    @staticmethod
    async def get_for_user(session: AsyncSession, *, user_id: UUID) -> GoalProgressSnapshot:
        counts = await GoalProgressService.load_counts(session, user_id=user_id)
        return GoalProgressSnapshot(
            counts=counts,
            targets=dict(FINAL_TARGETS),
            result=calculate_goal_progress(counts),
        )
