from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import distinct, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.capsule_days import CapsuleDay
from levefit.db.models.completed_items import CompletedDetox, CompletedExercise, CompletedRecipe
from levefit.db.models.water_intake_history import WaterIntakeDay

COMPLETED_ITEM_MODELS = {
    "exercise": (CompletedExercise, "exercise_id", "exercise_name"),
    "recipe": (CompletedRecipe, "recipe_id", "recipe_name"),
    "detox": (CompletedDetox, "detox_id", "detox_name"),
}


class HabitsRepo:
    @staticmethod
    async def mark_capsule_day(session: AsyncSession, *, user_id: UUID, day: date) -> bool:
        stmt = (
            insert(CapsuleDay)
            .values(user_id=user_id, date=day)
            .on_conflict_do_nothing(index_elements=[CapsuleDay.user_id, CapsuleDay.date])
            .returning(CapsuleDay.id)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def has_capsule_day(session: AsyncSession, *, user_id: UUID, day: date) -> bool:
        stmt = (
            select(CapsuleDay.id)
            .where(CapsuleDay.user_id == user_id, CapsuleDay.date == day)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def count_capsule_days(session: AsyncSession, *, user_id: UUID) -> int:
        stmt = select(func.count(CapsuleDay.id)).where(CapsuleDay.user_id == user_id)
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)

    @staticmethod
    async def count_capsule_days_by_user(
        session: AsyncSession,
        user_ids: list[UUID],
    ) -> dict[UUID, int]:
        if not user_ids:
            return {}
        stmt = (
            select(CapsuleDay.user_id, func.count(CapsuleDay.id))
            .where(CapsuleDay.user_id.in_(user_ids))
            .group_by(CapsuleDay.user_id)
        )
        result = await session.execute(stmt)
        return {user_id: int(total) for user_id, total in result.all()}

    @staticmethod
    async def list_capsule_user_ids_on(
        session: AsyncSession,
        *,
        user_ids: list[UUID],
        day: date,
    ) -> set[UUID]:
        if not user_ids:
            return set()
        stmt = select(CapsuleDay.user_id).where(
            CapsuleDay.user_id.in_(user_ids),
            CapsuleDay.date == day,
        )
        result = await session.execute(stmt)
        return set(result.scalars().all())

    @staticmethod
    async def add_water_intake(
        session: AsyncSession,
        *,
        user_id: UUID,
        day: date,
        amount_ml: int,
        now_utc: datetime,
    ) -> int:
        stmt = insert(WaterIntakeDay).values(
            user_id=user_id,
            date=day,
            total_intake=amount_ml,
            created_at=now_utc,
            updated_at=now_utc,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[WaterIntakeDay.user_id, WaterIntakeDay.date],
            set_={
                "total_intake": WaterIntakeDay.total_intake + stmt.excluded.total_intake,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(WaterIntakeDay.total_intake)
        result = await session.execute(stmt)
        return int(result.scalar_one())

    @staticmethod
    async def list_water_history(
        session: AsyncSession,
        *,
        user_id: UUID,
        since: date,
    ) -> dict[date, int]:
        stmt = select(WaterIntakeDay.date, WaterIntakeDay.total_intake).where(
            WaterIntakeDay.user_id == user_id,
            WaterIntakeDay.date >= since,
        )
        result = await session.execute(stmt)
        return {day: int(total) for day, total in result.all()}

    @staticmethod
    async def get_water_intakes_on(
        session: AsyncSession,
        *,
        user_ids: list[UUID],
        day: date,
    ) -> dict[UUID, int]:
        if not user_ids:
            return {}
        stmt = select(WaterIntakeDay.user_id, WaterIntakeDay.total_intake).where(
            WaterIntakeDay.user_id.in_(user_ids),
            WaterIntakeDay.date == day,
        )
        result = await session.execute(stmt)
        return {user_id: int(total) for user_id, total in result.all()}

    @staticmethod
    async def count_hydration_days(
        session: AsyncSession,
        *,
        user_id: UUID,
        water_goal: int,
    ) -> int:
        stmt = select(func.count(WaterIntakeDay.id)).where(
            WaterIntakeDay.user_id == user_id,
            WaterIntakeDay.total_intake >= water_goal,
        )
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)

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
        model, id_column, name_column = COMPLETED_ITEM_MODELS[kind]
        stmt = (
            insert(model)
            .values(
                {
                    "user_id": user_id,
                    id_column: item_id,
                    name_column: item_name,
                    "completed_at": now_utc,
                }
            )
            .on_conflict_do_nothing(
                index_elements=[model.user_id, getattr(model, id_column)],
            )
            .returning(model.id)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def count_completed(session: AsyncSession, *, kind: str, user_id: UUID) -> int:
        model, id_column, _ = COMPLETED_ITEM_MODELS[kind]
        stmt = select(func.count(distinct(getattr(model, id_column)))).where(
            model.user_id == user_id
        )
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)
