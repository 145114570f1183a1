from __future__ import annotations

import hashlib
import hmac

SIGNATURE_PREFIX = "sha1="


def compute_kiwify_signature(*, payload: bytes, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha1).hexdigest()


def is_valid_kiwify_signature(*, payload: bytes, secret: str, received: str | None) -> bool:
    if not secret or not received:
        return False
    signature = received.strip()
    if signature.startswith(SIGNATURE_PREFIX):
        signature = signature[len(SIGNATURE_PREFIX) :]
    expected = compute_kiwify_signature(payload=payload, secret=secret)
    return hmac.compare_digest(expected, signature.lower())
