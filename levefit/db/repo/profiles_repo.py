from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.profiles import Profile


class ProfilesRepo:
    @staticmethod
    async def get_by_user_id(session: AsyncSession, user_id: UUID) -> Profile | None:
        stmt = select(Profile).where(Profile.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_user_id_for_update(session: AsyncSession, user_id: UUID) -> Profile | None:
        stmt = select(Profile).where(Profile.user_id == user_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, *, profile: Profile) -> Profile:
        session.add(profile)
        await session.flush()
        return profile

    @staticmethod
    async def list_with_treatment_start(
        session: AsyncSession,
        *,
        started_on_or_before: date,
        after_user_id: UUID | None = None,
        limit: int = 200,
    ) -> list[Profile]:
        stmt = select(Profile).where(
            Profile.treatment_start_date.is_not(None),
            Profile.treatment_start_date <= started_on_or_before,
        )
        if after_user_id is not None:
            stmt = stmt.where(Profile.user_id > after_user_id)
        stmt = stmt.order_by(Profile.user_id.asc()).limit(limit)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_by_user_ids(session: AsyncSession, user_ids: list[UUID]) -> list[Profile]:
        if not user_ids:
            return []
        stmt = select(Profile).where(Profile.user_id.in_(user_ids))
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_pending_approval(session: AsyncSession, *, limit: int = 100) -> list[Profile]:
        stmt = (
            select(Profile)
            .where(Profile.is_approved.is_(False))
            .order_by(Profile.created_at.asc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
