from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from levefit.economy.affiliates.constants import (
    COMMISSION_RATE,
    MIN_WITHDRAWAL_AMOUNT,
    WITHDRAWAL_TRANSITIONS,
)
from levefit.economy.affiliates.errors import (
    WithdrawalAlreadyPendingError,
    WithdrawalBelowMinimumError,
    WithdrawalExceedsBalanceError,
    WithdrawalTransitionError,
)


def calculate_commission(sale_amount: Decimal) -> Decimal:
    return (Decimal(sale_amount) * COMMISSION_RATE).quantize(
        Decimal("0.01"),
        rounding=ROUND_HALF_UP,
    )


def available_balance(*, total_commission: Decimal, committed_withdrawals: Decimal) -> Decimal:
    return Decimal(total_commission) - Decimal(committed_withdrawals)


def validate_withdrawal_request(
    *,
    amount: Decimal,
    available: Decimal,
    has_pending: bool,
) -> None:
    if amount < MIN_WITHDRAWAL_AMOUNT:
        raise WithdrawalBelowMinimumError
    if amount > available:
        raise WithdrawalExceedsBalanceError
    if has_pending:
        raise WithdrawalAlreadyPendingError


def validate_withdrawal_transition(*, current_status: str, decision: str) -> None:
    if decision not in WITHDRAWAL_TRANSITIONS.get(current_status, frozenset()):
        raise WithdrawalTransitionError(f"{current_status} -> {decision}")
