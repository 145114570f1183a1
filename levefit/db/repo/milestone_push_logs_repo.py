from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.milestone_push_logs import MilestonePushLog


class MilestonePushLogsRepo:
    @staticmethod
    async def create_once(
        session: AsyncSession,
        *,
        user_id: UUID,
        treatment_day: int,
        sent_at: datetime,
    ) -> bool:
        stmt = (
            insert(MilestonePushLog)
            .values(user_id=user_id, treatment_day=treatment_day, sent_at=sent_at)
            .on_conflict_do_nothing(
                index_elements=[MilestonePushLog.user_id, MilestonePushLog.treatment_day]
            )
            .returning(MilestonePushLog.user_id)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
