from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from levefit.economy.habits.constants import WATER_STREAK_MAX_DAYS


@dataclass(frozen=True, slots=True)
class WaterStreakSummary:
    current_streak: int
    total_days_met_goal: int


def summarize_water_streak(
    history: dict[date, int],
    *,
    goal_ml: int,
    today: date,
) -> WaterStreakSummary:
    """Counts consecutive goal days ending today.

    Today still being below the goal does not break the streak: counting then
    starts from yesterday.
    """
    total_days_met_goal = sum(1 for total in history.values() if total >= goal_ml)

    current_streak = 0
    for offset in range(WATER_STREAK_MAX_DAYS):
        day = today - timedelta(days=offset)
        if history.get(day, 0) >= goal_ml:
            current_streak += 1
        elif offset == 0:
            continue
        else:
            break

    return WaterStreakSummary(
        current_streak=current_streak,
        total_days_met_goal=total_days_met_goal,
    )


def water_percent(total_ml: int, goal_ml: int) -> int:
    if goal_ml <= 0:
        return 0
    return min(100, round(total_ml * 100 / goal_ml))
