from __future__ import annotations

from datetime import date

from levefit.economy.habits.constants import DEFAULT_KIT_DURATION_DAYS, KIT_DURATION_DAYS


def kit_duration_days(kit_type: str | None) -> int:
    if kit_type is None:
        return DEFAULT_KIT_DURATION_DAYS
    return KIT_DURATION_DAYS.get(kit_type, DEFAULT_KIT_DURATION_DAYS)


def treatment_day(*, start_date: date, today: date) -> int:
    """1-based day of treatment; the start date itself is day 1."""
    return (today - start_date).days + 1


def days_remaining(*, start_date: date, kit_type: str | None, today: date) -> int:
    return kit_duration_days(kit_type) - (today - start_date).days
