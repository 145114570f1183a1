from __future__ import annotations

from levefit.core.config import get_settings

settings = get_settings()


def _clamp_hour(value: int) -> int:
    return max(0, min(23, int(value)))


CAPSULE_REMINDER_INTERVAL_SECONDS = 300.0
TREATMENT_END_PUSH_HOUR = _clamp_hour(settings.treatment_end_push_hour)
DAILY_SUMMARY_PUSH_HOUR = _clamp_hour(settings.daily_summary_push_hour)

__all__ = [
    "CAPSULE_REMINDER_INTERVAL_SECONDS",
    "TREATMENT_END_PUSH_HOUR",
    "DAILY_SUMMARY_PUSH_HOUR",
]
