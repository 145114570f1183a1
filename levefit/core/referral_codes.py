from __future__ import annotations

import secrets

ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
WALLET_CODE_PREFIX = "LF"


def generate_referral_code(length: int = 6, *, prefix: str = WALLET_CODE_PREFIX) -> str:
    """Generates a short uppercase referral code with low typo ambiguity."""
    if length <= 0:
        raise ValueError("length must be positive")
    return prefix + "".join(secrets.choice(ALPHABET) for _ in range(length))


def normalize_referral_code(raw_code: str | None) -> str | None:
    if raw_code is None:
        return None
    code = raw_code.strip().upper()
    return code or None
