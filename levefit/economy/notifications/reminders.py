from __future__ import annotations

from datetime import date, datetime, time, timedelta

from levefit.economy.habits.kits import days_remaining
from levefit.economy.notifications.constants import (
    CAPSULE_WINDOW_MINUTES,
    TREATMENT_END_WINDOW_DAYS,
    WATER_FIRST_REMINDER_FROM_HOUR,
    WATER_FIRST_REMINDER_UNTIL_HOUR,
)


def _minute_of_day(value: time | datetime) -> int:
    return value.hour * 60 + value.minute


def is_capsule_reminder_due(*, capsule_time: time, now_local: datetime) -> bool:
    return abs(_minute_of_day(capsule_time) - _minute_of_day(now_local)) <= CAPSULE_WINDOW_MINUTES


def is_water_reminder_due(
    *,
    interval_minutes: int | None,
    last_notification_utc: datetime | None,
    now_utc: datetime,
    now_local: datetime,
) -> bool:
    if not interval_minutes:
        return False
    if last_notification_utc is not None:
        return now_utc - last_notification_utc >= timedelta(minutes=interval_minutes)
    return WATER_FIRST_REMINDER_FROM_HOUR <= now_local.hour <= WATER_FIRST_REMINDER_UNTIL_HOUR


def is_treatment_ending(*, start_date: date, kit_type: str | None, today: date) -> bool:
    remaining = days_remaining(start_date=start_date, kit_type=kit_type, today=today)
    return 0 <= remaining <= TREATMENT_END_WINDOW_DAYS
