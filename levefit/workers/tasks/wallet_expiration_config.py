from __future__ import annotations

from levefit.core.config import get_settings

settings = get_settings()


def _clamp_hour(value: int) -> int:
    return max(0, min(23, int(value)))


def _clamp_minute(value: int) -> int:
    return max(0, min(59, int(value)))


WALLET_EXPIRATION_HOUR = _clamp_hour(settings.wallet_expiration_hour)
WALLET_EXPIRATION_MINUTE = _clamp_minute(settings.wallet_expiration_minute)

__all__ = [
    "WALLET_EXPIRATION_HOUR",
    "WALLET_EXPIRATION_MINUTE",
]
