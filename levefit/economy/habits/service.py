from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.profiles import Profile
from levefit.db.repo.habits_repo import HabitsRepo
from levefit.db.repo.profiles_repo import ProfilesRepo
from levefit.economy.habits.constants import (
    COMPLETED_ITEM_KINDS,
    DEFAULT_WATER_GOAL_ML,
    MAX_WATER_INTAKE_ML_PER_ENTRY,
    WATER_STREAK_MAX_DAYS,
)
from levefit.economy.habits.errors import (
    InvalidMeasurementError,
    ProfileNotFoundError,
    StaleProfileVersionError,
    UnknownItemKindError,
)
from levefit.economy.habits.imc import calculate_imc, classify_imc
from levefit.economy.habits.water import WaterStreakSummary, summarize_water_streak

logger = structlog.get_logger(__name__)

EDITABLE_PROFILE_FIELDS = (
    "name",
    "treatment_start_date",
    "kit_type",
    "water_goal",
    "onboarding_completed",
    "push_activated",
)


@dataclass(frozen=True, slots=True)
class WaterDayResult:
    day: date
    total_intake: int
    goal: int
    streak: WaterStreakSummary


class HabitsService:
    @staticmethod
    async def _water_goal(session: AsyncSession, user_id: UUID) -> int:
        profile = await ProfilesRepo.get_by_user_id(session, user_id)
        if profile is None or not profile.water_goal:
            return DEFAULT_WATER_GOAL_ML
        return profile.water_goal

    @staticmethod
    async def add_water_intake(
        session: AsyncSession,
        *,
        user_id: UUID,
        day: date,
        amount_ml: int,
        now_utc: datetime,
    ) -> WaterDayResult:
        if amount_ml <= 0 or amount_ml > MAX_WATER_INTAKE_ML_PER_ENTRY:
            raise InvalidMeasurementError("amount_ml out of range")

        total = await HabitsRepo.add_water_intake(
            session,
            user_id=user_id,
            day=day,
            amount_ml=amount_ml,
            now_utc=now_utc,
        )
        goal = await HabitsService._water_goal(session, user_id)
        history = await HabitsRepo.list_water_history(
            session,
            user_id=user_id,
            since=day - timedelta(days=WATER_STREAK_MAX_DAYS),
        )
        return WaterDayResult(
            day=day,
            total_intake=total,
            goal=goal,
            streak=summarize_water_streak(history, goal_ml=goal, today=day),
        )

    @staticmethod
    async def get_water_streak(
        session: AsyncSession,
        *,
        user_id: UUID,
        today: date,
    ) -> WaterStreakSummary:
        goal = await HabitsService._water_goal(session, user_id)
        history = await HabitsRepo.list_water_history(
            session,
            user_id=user_id,
            since=today - timedelta(days=WATER_STREAK_MAX_DAYS),
        )
        return summarize_water_streak(history, goal_ml=goal, today=today)

    @staticmethod
    async def mark_capsule_taken(session: AsyncSession, *, user_id: UUID, day: date) -> bool:
        return await HabitsRepo.mark_capsule_day(session, user_id=user_id, day=day)

    @staticmethod
    async def complete_item(
        session: AsyncSession,
        *,
        kind: str,
        user_id: UUID,
        item_id: str,
        item_name: str,
        now_utc: datetime,
    ) -> bool:
        if kind not in COMPLETED_ITEM_KINDS:
            raise UnknownItemKindError(kind)
        return await HabitsRepo.complete_item(
            session,
            kind=kind,
            user_id=user_id,
            item_id=item_id,
            item_name=item_name,
            now_utc=now_utc,
        )

    @staticmethod
    async def update_imc(
        session: AsyncSession,
        *,
        user_id: UUID,
        weight_kg: Decimal,
        height_cm: Decimal,
        now_utc: datetime,
    ) -> Profile:
        profile = await ProfilesRepo.get_by_user_id_for_update(session, user_id)
        if profile is None:
            raise ProfileNotFoundError

        imc = calculate_imc(weight_kg, height_cm)
        profile.weight = weight_kg
        profile.height = height_cm
        profile.imc = imc
        profile.imc_category = classify_imc(imc)
        profile.state_version += 1
        profile.updated_at = now_utc
        await session.flush()
        return profile

    @staticmethod
    async def save_profile(
        session: AsyncSession,
        *,
        user_id: UUID,
        expected_version: int | None,
        changes: dict[str, Any],
        now_utc: datetime,
        email: str | None = None,
    ) -> Profile:
        """Applies a client profile write, rejecting writes based on an old version.

        A missing profile is created when no version is expected.
        """
        profile = await ProfilesRepo.get_by_user_id_for_update(session, user_id)
        if profile is None:
            if expected_version is not None:
                raise ProfileNotFoundError
            profile = Profile(
                user_id=user_id,
                name=str(changes.get("name") or ""),
                email=email,
                is_approved=False,
                water_goal=DEFAULT_WATER_GOAL_ML,
                onboarding_completed=False,
                push_activated=False,
                state_version=1,
                created_at=now_utc,
                updated_at=now_utc,
            )
            _apply_profile_changes(profile, changes)
            await ProfilesRepo.create(session, profile=profile)
            logger.info("profile_created", user_id=str(user_id))
            return profile

        if expected_version is None or expected_version != profile.state_version:
            raise StaleProfileVersionError

        _apply_profile_changes(profile, changes)
        profile.state_version += 1
        profile.updated_at = now_utc
        await session.flush()
        return profile

    @staticmethod
    async def approve_profile(session: AsyncSession, *, user_id: UUID, now_utc: datetime) -> Profile:
        profile = await ProfilesRepo.get_by_user_id_for_update(session, user_id)
        if profile is None:
            raise ProfileNotFoundError
        if profile.is_approved:
            return profile

        profile.is_approved = True
        profile.state_version += 1
        profile.updated_at = now_utc
        await session.flush()
        logger.info("profile_approved", user_id=str(user_id))
        return profile


def _apply_profile_changes(profile: Profile, changes: dict[str, Any]) -> None:
    for field_name in EDITABLE_PROFILE_FIELDS:
        if field_name in changes:
            setattr(profile, field_name, changes[field_name])
