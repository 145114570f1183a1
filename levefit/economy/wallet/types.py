from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True, slots=True)
class WalletTransactionView:
    id: UUID
    amount: Decimal
    type: str
    description: str | None
    created_at: datetime


@dataclass(frozen=True, slots=True)
class ReferralView:
    id: UUID
    referred_email: str | None
    status: str
    credit_amount: Decimal
    created_at: datetime


@dataclass(frozen=True, slots=True)
class WalletOverview:
    balance: Decimal
    referral_code: str
    referral_link: str
    transactions: list[WalletTransactionView]
    referrals_by_status: dict[str, list[ReferralView]] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ReferralCreditResult:
    duplicate: bool
    credit_amount: Decimal
    new_balance: Decimal | None


@dataclass(frozen=True, slots=True)
class WalletDebitResult:
    new_balance: Decimal
    transaction_id: UUID
    replayed: bool = False


@dataclass(frozen=True, slots=True)
class WalletExpirationResult:
    expired_count: int
    total_expired_amount: Decimal
    expiration_days: int


@dataclass(frozen=True, slots=True)
class ReferralApprovalResult:
    referral_id: UUID
    referrer_id: UUID
    credit_amount: Decimal
    new_balance: Decimal
