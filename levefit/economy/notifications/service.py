from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.core.local_time import local_date, local_now
from levefit.db.repo.habits_repo import HabitsRepo
from levefit.db.repo.milestone_push_logs_repo import MilestonePushLogsRepo
from levefit.db.repo.notification_settings_repo import NotificationSettingsRepo
from levefit.db.repo.profiles_repo import ProfilesRepo
from levefit.db.repo.push_subscriptions_repo import PushSubscriptionsRepo
from levefit.economy.habits.constants import DEFAULT_WATER_GOAL_ML
from levefit.economy.habits.kits import treatment_day
from levefit.economy.habits.water import water_percent
from levefit.economy.notifications.constants import (
    NOTIFICATION_TYPE_CAPSULE,
    NOTIFICATION_TYPE_DAILY_SUMMARY,
    NOTIFICATION_TYPE_TEST,
    NOTIFICATION_TYPE_TREATMENT_END,
    NOTIFICATION_TYPE_WATER,
)
from levefit.economy.notifications.delivery import deliver_to_users
from levefit.economy.notifications.messages import (
    capsule_message,
    daily_summary_message,
    milestone_message,
    test_message,
    treatment_end_message,
    water_message,
)
from levefit.economy.notifications.reminders import (
    is_capsule_reminder_due,
    is_treatment_ending,
    is_water_reminder_due,
)
from levefit.services.web_push import PushMessage

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PushSendResult:
    sent: int
    failed: int
    target_users: int


@dataclass(frozen=True, slots=True)
class MilestoneBatchResult:
    users_matched: int
    sent: int
    skipped: int
    last_user_id: UUID | None


class NotificationService:
    @staticmethod
    async def _capsule_targets(session: AsyncSession, *, now_utc: datetime) -> list[UUID]:
        now_local = local_now(now_utc)
        settings_rows = await NotificationSettingsRepo.list_capsule_reminders(session)
        due_user_ids = [
            row.user_id
            for row in settings_rows
            if row.capsule_time is not None
            and is_capsule_reminder_due(capsule_time=row.capsule_time, now_local=now_local)
        ]
        already_taken = await HabitsRepo.list_capsule_user_ids_on(
            session,
            user_ids=due_user_ids,
            day=now_local.date(),
        )
        return [user_id for user_id in due_user_ids if user_id not in already_taken]

    @staticmethod
    async def _water_targets(session: AsyncSession, *, now_utc: datetime) -> list[UUID]:
        now_local = local_now(now_utc)
        settings_rows = await NotificationSettingsRepo.list_water_reminders(session)
        return [
            row.user_id
            for row in settings_rows
            if is_water_reminder_due(
                interval_minutes=row.water_interval,
                last_notification_utc=row.last_water_notification,
                now_utc=now_utc,
                now_local=now_local,
            )
        ]

    @staticmethod
    async def _treatment_end_targets(session: AsyncSession, *, today: date) -> list[UUID]:
        user_ids: list[UUID] = []
        after_user_id: UUID | None = None
        while True:
            profiles = await ProfilesRepo.list_with_treatment_start(
                session,
                started_on_or_before=today,
                after_user_id=after_user_id,
            )
            if not profiles:
                return user_ids
            for profile in profiles:
                if profile.kit_type is None or profile.treatment_start_date is None:
                    continue
                if is_treatment_ending(
                    start_date=profile.treatment_start_date,
                    kit_type=profile.kit_type,
                    today=today,
                ):
                    user_ids.append(profile.user_id)
            after_user_id = profiles[-1].user_id

    @staticmethod
    async def _daily_summary_messages(
        session: AsyncSession,
        *,
        today: date,
    ) -> dict[UUID, PushMessage]:
        user_ids = await PushSubscriptionsRepo.list_subscribed_user_ids(session)
        profiles = {
            profile.user_id: profile
            for profile in await ProfilesRepo.list_by_user_ids(session, user_ids)
        }
        capsule_counts = await HabitsRepo.count_capsule_days_by_user(session, user_ids)
        water_today = await HabitsRepo.get_water_intakes_on(session, user_ids=user_ids, day=today)

        messages: dict[UUID, PushMessage] = {}
        for user_id in user_ids:
            profile = profiles.get(user_id)
            goal = profile.water_goal if profile is not None and profile.water_goal else None
            day_number = 0
            if profile is not None and profile.treatment_start_date is not None:
                day_number = treatment_day(start_date=profile.treatment_start_date, today=today)
            messages[user_id] = daily_summary_message(
                name=profile.name if profile is not None else None,
                treatment_day=day_number,
                capsule_days=capsule_counts.get(user_id, 0),
                water_percent=water_percent(
                    water_today.get(user_id, 0),
                    goal or DEFAULT_WATER_GOAL_ML,
                ),
                today=today,
            )
        return messages

    @staticmethod
    async def build_messages(
        session: AsyncSession,
        *,
        notification_type: str,
        target_user_id: UUID | None,
        now_utc: datetime,
    ) -> dict[UUID, PushMessage]:
        today = local_date(now_utc)
        if notification_type == NOTIFICATION_TYPE_TEST:
            if target_user_id is None:
                return {}
            return {target_user_id: test_message()}
        if notification_type == NOTIFICATION_TYPE_CAPSULE:
            message = capsule_message()
            user_ids = await NotificationService._capsule_targets(session, now_utc=now_utc)
            return {user_id: message for user_id in user_ids}
        if notification_type == NOTIFICATION_TYPE_WATER:
            message = water_message()
            user_ids = await NotificationService._water_targets(session, now_utc=now_utc)
            return {user_id: message for user_id in user_ids}
        if notification_type == NOTIFICATION_TYPE_TREATMENT_END:
            message = treatment_end_message()
            user_ids = await NotificationService._treatment_end_targets(session, today=today)
            return {user_id: message for user_id in user_ids}
        if notification_type == NOTIFICATION_TYPE_DAILY_SUMMARY:
            return await NotificationService._daily_summary_messages(session, today=today)
        raise ValueError(f"unsupported notification type: {notification_type}")

    @staticmethod
    async def send(
        session: AsyncSession,
        *,
        notification_type: str,
        target_user_id: UUID | None,
        now_utc: datetime,
    ) -> PushSendResult:
        messages = await NotificationService.build_messages(
            session,
            notification_type=notification_type,
            target_user_id=target_user_id,
            now_utc=now_utc,
        )
        counts = await deliver_to_users(session, messages=messages)

        if notification_type == NOTIFICATION_TYPE_WATER:
            for user_id in counts.delivered_user_ids:
                await NotificationSettingsRepo.stamp_water_notification(
                    session,
                    user_id=user_id,
                    sent_at_utc=now_utc,
                )

        logger.info(
            "push_notifications_sent",
            notification_type=notification_type,
            target_users=len(messages),
            sent=counts.sent,
            failed=counts.failed,
        )
        return PushSendResult(sent=counts.sent, failed=counts.failed, target_users=len(messages))

    @staticmethod
    async def send_milestone_batch(
        session: AsyncSession,
        *,
        today: date,
        now_utc: datetime,
        after_user_id: UUID | None,
        batch_size: int,
    ) -> MilestoneBatchResult:
        """Sends due milestone pushes for one page of profiles.

        The (user, day) log row is claimed before sending, so a milestone is
        delivered at most once even when the scan runs again the same day.
        """
        profiles = await ProfilesRepo.list_with_treatment_start(
            session,
            started_on_or_before=today,
            after_user_id=after_user_id,
            limit=batch_size,
        )
        if not profiles:
            return MilestoneBatchResult(users_matched=0, sent=0, skipped=0, last_user_id=None)

        messages: dict[UUID, PushMessage] = {}
        users_matched = 0
        skipped = 0
        for profile in profiles:
            if profile.treatment_start_date is None:
                continue
            day_number = treatment_day(start_date=profile.treatment_start_date, today=today)
            message = milestone_message(treatment_day=day_number, today=today)
            if message is None:
                continue
            users_matched += 1
            claimed = await MilestonePushLogsRepo.create_once(
                session,
                user_id=profile.user_id,
                treatment_day=day_number,
                sent_at=now_utc,
            )
            if not claimed:
                skipped += 1
                continue
            messages[profile.user_id] = message

        counts = await deliver_to_users(session, messages=messages)
        return MilestoneBatchResult(
            users_matched=users_matched,
            sent=counts.sent,
            skipped=skipped,
            last_user_id=profiles[-1].user_id,
        )
