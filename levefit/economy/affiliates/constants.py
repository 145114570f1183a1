from __future__ import annotations

from decimal import Decimal

AFFILIATE_CODE_PREFIX = "AF"
AFFILIATE_CODE_GENERATION_ATTEMPTS = 10
COMMISSION_RATE = Decimal("0.10")
MIN_WITHDRAWAL_AMOUNT = Decimal("50.00")
RANKING_LIMIT = 10

SALE_STATUS_APPROVED = "approved"

WITHDRAWAL_STATUS_PENDING = "pending"
WITHDRAWAL_STATUS_APPROVED = "approved"
WITHDRAWAL_STATUS_REJECTED = "rejected"
WITHDRAWAL_STATUS_PAID = "paid"

COMMITTED_WITHDRAWAL_STATUSES = (
    WITHDRAWAL_STATUS_PENDING,
    WITHDRAWAL_STATUS_APPROVED,
    WITHDRAWAL_STATUS_PAID,
)

# Allowed review decisions keyed by the current withdrawal status.
WITHDRAWAL_TRANSITIONS: dict[str, frozenset[str]] = {
    WITHDRAWAL_STATUS_PENDING: frozenset({WITHDRAWAL_STATUS_APPROVED, WITHDRAWAL_STATUS_REJECTED}),
    WITHDRAWAL_STATUS_APPROVED: frozenset({WITHDRAWAL_STATUS_PAID}),
}

PIX_KEY_TYPES = frozenset({"cpf", "cnpj", "email", "phone", "random"})
