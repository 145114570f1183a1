from __future__ import annotations

from levefit.core.config import get_settings

settings = get_settings()


def _clamp_hour(value: int) -> int:
    return max(0, min(23, int(value)))


def _clamp_minute(value: int) -> int:
    return max(0, min(59, int(value)))


def _clamp_batch_size(value: int) -> int:
    return max(1, min(1000, int(value)))


MILESTONE_PUSH_HOUR = _clamp_hour(settings.milestone_push_hour)
MILESTONE_PUSH_MINUTE = _clamp_minute(settings.milestone_push_minute)
MILESTONE_PUSH_BATCH_SIZE = _clamp_batch_size(settings.milestone_push_batch_size)

__all__ = [
    "MILESTONE_PUSH_HOUR",
    "MILESTONE_PUSH_MINUTE",
    "MILESTONE_PUSH_BATCH_SIZE",
]
