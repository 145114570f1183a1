from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.notification_settings import NotificationSettings


class NotificationSettingsRepo:
    @staticmethod
    async def list_capsule_reminders(session: AsyncSession) -> list[NotificationSettings]:
        stmt = select(NotificationSettings).where(
            NotificationSettings.capsule_reminder.is_(True),
            NotificationSettings.capsule_time.is_not(None),
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_water_reminders(session: AsyncSession) -> list[NotificationSettings]:
        stmt = select(NotificationSettings).where(NotificationSettings.water_reminder.is_(True))
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def stamp_water_notification(
        session: AsyncSession,
        *,
        user_id: UUID,
        sent_at_utc: datetime,
    ) -> None:
        stmt = (
            update(NotificationSettings)
            .where(NotificationSettings.user_id == user_id)
            .values(last_water_notification=sent_at_utc, updated_at=sent_at_utc)
        )
        await session.execute(stmt)
