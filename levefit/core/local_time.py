from __future__ import annotations

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

from levefit.core.config import get_settings


def local_timezone() -> ZoneInfo:
    return ZoneInfo(get_settings().scheduler_timezone)


def local_now(now_utc: datetime) -> datetime:
    """Converts a UTC datetime to the app's local wall clock."""
    return now_utc.astimezone(local_timezone())


def local_date(now_utc: datetime) -> date:
    return local_now(now_utc).date()


def local_midnight_utc(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=local_timezone()).astimezone(timezone.utc)
