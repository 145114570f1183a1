from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.core.config import get_settings
from levefit.core.referral_codes import generate_referral_code, normalize_referral_code
from levefit.db.models.orders import Order
from levefit.db.models.referrals import Referral
from levefit.db.models.wallet_transactions import WalletTransaction
from levefit.db.models.wallets import Wallet
from levefit.db.repo.orders_repo import OrdersRepo
from levefit.db.repo.referrals_repo import ReferralsRepo
from levefit.db.repo.wallet_transactions_repo import WalletTransactionsRepo
from levefit.db.repo.wallets_repo import WalletsRepo
from levefit.economy.wallet.constants import (
    APPROVAL_CREDIT_DESCRIPTION,
    AWAITING_APPROVAL_STATUSES,
    CENTS,
    CREDIT_DESCRIPTION_TEMPLATE,
    DEFAULT_PURCHASE_TITLE,
    EXPIRATION_DAYS,
    EXPIRATION_DESCRIPTION,
    PURCHASE_DESCRIPTION_TEMPLATE,
    REFERRAL_CODE_GENERATION_ATTEMPTS,
    REFERRAL_CREDIT_AMOUNT,
    REFERRAL_STATUS_APPROVED,
    REFERRAL_STATUS_CONVERTED,
    TRANSACTION_TYPE_CREDIT,
    TRANSACTION_TYPE_EXPIRATION,
    TRANSACTION_TYPE_PURCHASE,
)
from levefit.economy.wallet.errors import (
    DuplicateReferralOrderError,
    InsufficientBalanceError,
    InvalidAmountError,
    ReferralAlreadyApprovedError,
    ReferralCodeGenerationError,
    ReferralCodeNotFoundError,
    ReferralNotFoundError,
    WalletNotFoundError,
)
from levefit.economy.wallet.types import (
    ReferralApprovalResult,
    ReferralCreditResult,
    ReferralView,
    WalletDebitResult,
    WalletOverview,
    WalletTransactionView,
)

logger = structlog.get_logger(__name__)


def _to_cents(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(CENTS)


def build_referral_link(referral_code: str) -> str:
    return f"{get_settings().referral_landing_url}?ref={referral_code}"


class WalletService:
    @staticmethod
    async def get_or_create_wallet(
        session: AsyncSession,
        *,
        user_id: UUID,
        now_utc: datetime,
    ) -> Wallet:
        wallet = await WalletsRepo.get_by_user_id(session, user_id)
        if wallet is not None:
            return wallet

        for _ in range(REFERRAL_CODE_GENERATION_ATTEMPTS):
            code = generate_referral_code()
            if await WalletsRepo.referral_code_exists(session, code):
                continue
            created = await WalletsRepo.create_if_absent(
                session,
                user_id=user_id,
                referral_code=code,
                now_utc=now_utc,
            )
            if created:
                logger.info("wallet_created", user_id=str(user_id), referral_code=code)
            wallet = await WalletsRepo.get_by_user_id(session, user_id)
            if wallet is not None:
                return wallet

        raise ReferralCodeGenerationError

    @staticmethod
    async def get_overview(
        session: AsyncSession,
        *,
        user_id: UUID,
        now_utc: datetime,
    ) -> WalletOverview:
        wallet = await WalletService.get_or_create_wallet(session, user_id=user_id, now_utc=now_utc)
        transactions = await WalletTransactionsRepo.list_for_wallet(session, wallet_id=wallet.id)
        referrals = await ReferralsRepo.list_for_referrer(session, referrer_id=user_id)

        referrals_by_status: dict[str, list[ReferralView]] = {}
        for referral in referrals:
            referrals_by_status.setdefault(referral.status, []).append(
                ReferralView(
                    id=referral.id,
                    referred_email=referral.referred_email,
                    status=referral.status,
                    credit_amount=referral.credit_amount,
                    created_at=referral.created_at,
                )
            )

        return WalletOverview(
            balance=wallet.balance,
            referral_code=wallet.referral_code,
            referral_link=build_referral_link(wallet.referral_code),
            transactions=[
                WalletTransactionView(
                    id=transaction.id,
                    amount=transaction.amount,
                    type=transaction.type,
                    description=transaction.description,
                    created_at=transaction.created_at,
                )
                for transaction in transactions
            ],
            referrals_by_status=referrals_by_status,
        )

    @staticmethod
    async def credit_referral(
        session: AsyncSession,
        *,
        referral_code: str,
        kiwify_order_id: str,
        customer_email: str | None,
        now_utc: datetime,
    ) -> ReferralCreditResult:
        code = normalize_referral_code(referral_code)
        if code is None:
            raise ReferralCodeNotFoundError

        wallet = await WalletsRepo.get_by_referral_code_for_update(session, code)
        if wallet is None:
            raise ReferralCodeNotFoundError

        existing = await ReferralsRepo.get_by_kiwify_order_id(session, kiwify_order_id)
        if existing is not None:
            return ReferralCreditResult(
                duplicate=True,
                credit_amount=existing.credit_amount,
                new_balance=None,
            )

        referral = await ReferralsRepo.create(
            session,
            referral=Referral(
                referrer_id=wallet.user_id,
                referral_code=code,
                referred_email=customer_email,
                kiwify_order_id=kiwify_order_id,
                status=REFERRAL_STATUS_APPROVED,
                credit_amount=REFERRAL_CREDIT_AMOUNT,
                approved_at=now_utc,
                converted_at=now_utc,
                created_at=now_utc,
            ),
        )
        await WalletTransactionsRepo.create(
            session,
            transaction=WalletTransaction(
                wallet_id=wallet.id,
                user_id=wallet.user_id,
                amount=REFERRAL_CREDIT_AMOUNT,
                type=TRANSACTION_TYPE_CREDIT,
                description=CREDIT_DESCRIPTION_TEMPLATE.format(email=customer_email or ""),
                referral_id=referral.id,
                idempotency_key=f"kiwify:{kiwify_order_id}",
                created_at=now_utc,
            ),
        )
        wallet.balance = _to_cents(wallet.balance + REFERRAL_CREDIT_AMOUNT)
        wallet.updated_at = now_utc
        await session.flush()

        logger.info(
            "wallet_referral_credited",
            user_id=str(wallet.user_id),
            kiwify_order_id=kiwify_order_id,
            new_balance=str(wallet.balance),
        )
        return ReferralCreditResult(
            duplicate=False,
            credit_amount=REFERRAL_CREDIT_AMOUNT,
            new_balance=wallet.balance,
        )

    @staticmethod
    async def register_conversion(
        session: AsyncSession,
        *,
        referral_code: str,
        referred_email: str | None,
        kiwify_order_id: str | None,
        now_utc: datetime,
    ) -> Referral:
        """Records a sale reported by hand; the credit waits for admin approval."""
        code = normalize_referral_code(referral_code)
        if code is None:
            raise ReferralCodeNotFoundError
        wallet = await WalletsRepo.get_by_referral_code_for_update(session, code)
        if wallet is None:
            raise ReferralCodeNotFoundError
        if kiwify_order_id and await ReferralsRepo.get_by_kiwify_order_id(session, kiwify_order_id):
            raise DuplicateReferralOrderError

        referral = await ReferralsRepo.create(
            session,
            referral=Referral(
                referrer_id=wallet.user_id,
                referral_code=code,
                referred_email=referred_email,
                kiwify_order_id=kiwify_order_id,
                status=REFERRAL_STATUS_CONVERTED,
                credit_amount=REFERRAL_CREDIT_AMOUNT,
                converted_at=now_utc,
                created_at=now_utc,
            ),
        )
        logger.info(
            "wallet_referral_conversion_registered",
            referral_id=str(referral.id),
            referrer_id=str(wallet.user_id),
        )
        return referral

    @staticmethod
    async def approve_referral(
        session: AsyncSession,
        *,
        referral_id: UUID,
        now_utc: datetime,
    ) -> ReferralApprovalResult:
        referral = await ReferralsRepo.get_by_id_for_update(session, referral_id)
        if referral is None:
            raise ReferralNotFoundError
        if referral.status not in AWAITING_APPROVAL_STATUSES:
            raise ReferralAlreadyApprovedError

        await WalletService.get_or_create_wallet(session, user_id=referral.referrer_id, now_utc=now_utc)
        wallet = await WalletsRepo.get_by_user_id_for_update(session, referral.referrer_id)
        if wallet is None:
            raise WalletNotFoundError

        credit_amount = _to_cents(referral.credit_amount or REFERRAL_CREDIT_AMOUNT)
        await WalletTransactionsRepo.create(
            session,
            transaction=WalletTransaction(
                wallet_id=wallet.id,
                user_id=wallet.user_id,
                amount=credit_amount,
                type=TRANSACTION_TYPE_CREDIT,
                description=APPROVAL_CREDIT_DESCRIPTION,
                referral_id=referral.id,
                idempotency_key=f"referral:{referral.id}",
                created_at=now_utc,
            ),
        )
        wallet.balance = _to_cents(wallet.balance + credit_amount)
        wallet.updated_at = now_utc
        referral.status = REFERRAL_STATUS_APPROVED
        referral.credit_amount = credit_amount
        referral.approved_at = now_utc
        await session.flush()

        logger.info(
            "wallet_referral_approved",
            referral_id=str(referral.id),
            referrer_id=str(referral.referrer_id),
            new_balance=str(wallet.balance),
        )
        return ReferralApprovalResult(
            referral_id=referral.id,
            referrer_id=referral.referrer_id,
            credit_amount=credit_amount,
            new_balance=wallet.balance,
        )

    @staticmethod
    async def debit_wallet(
        session: AsyncSession,
        *,
        user_id: UUID,
        amount: Decimal,
        description: str,
        idempotency_key: str,
        now_utc: datetime,
    ) -> WalletDebitResult:
        """Debits a locked wallet and appends the purchase row in the caller's transaction."""
        amount = _to_cents(amount)
        if amount <= 0:
            raise InvalidAmountError

        wallet = await WalletsRepo.get_by_user_id_for_update(session, user_id)
        if wallet is None:
            raise WalletNotFoundError

        existing = await WalletTransactionsRepo.get_by_idempotency_key(session, idempotency_key)
        if existing is not None:
            return WalletDebitResult(
                new_balance=wallet.balance,
                transaction_id=existing.id,
                replayed=True,
            )

        if amount > wallet.balance:
            raise InsufficientBalanceError

        transaction = await WalletTransactionsRepo.create(
            session,
            transaction=WalletTransaction(
                wallet_id=wallet.id,
                user_id=user_id,
                amount=-amount,
                type=TRANSACTION_TYPE_PURCHASE,
                description=description,
                idempotency_key=idempotency_key,
                created_at=now_utc,
            ),
        )
        wallet.balance = _to_cents(wallet.balance - amount)
        wallet.updated_at = now_utc
        await session.flush()

        logger.info(
            "wallet_debited",
            user_id=str(user_id),
            amount=str(amount),
            new_balance=str(wallet.balance),
        )
        return WalletDebitResult(new_balance=wallet.balance, transaction_id=transaction.id)

    @staticmethod
    async def pay_with_wallet(
        session: AsyncSession,
        *,
        user_id: UUID,
        amount: Decimal,
        product_title: str | None,
        items: list[dict[str, Any]] | None,
        customer_email: str | None,
        now_utc: datetime,
    ) -> WalletDebitResult:
        payment_reference = f"wallet_{uuid4()}"
        result = await WalletService.debit_wallet(
            session,
            user_id=user_id,
            amount=amount,
            description=PURCHASE_DESCRIPTION_TEMPLATE.format(
                title=product_title or DEFAULT_PURCHASE_TITLE
            ),
            idempotency_key=payment_reference,
            now_utc=now_utc,
        )
        await OrdersRepo.create(
            session,
            order=Order(
                user_id=user_id,
                stripe_session_id=payment_reference,
                status="paid",
                amount_total=int((_to_cents(amount) * 100).to_integral_value()),
                currency="brl",
                customer_email=customer_email,
                items=items,
                created_at=now_utc,
                updated_at=now_utc,
            ),
        )
        return result

    @staticmethod
    async def expire_wallet(
        session: AsyncSession,
        *,
        wallet_id: UUID,
        now_utc: datetime,
    ) -> Decimal | None:
        """Zeroes one inactive wallet; returns the expired amount or None when skipped."""
        window_start = now_utc - timedelta(days=EXPIRATION_DAYS)
        wallet = await WalletsRepo.get_by_id_for_update(session, wallet_id)
        if wallet is None or wallet.balance <= 0 or wallet.updated_at >= window_start:
            return None

        has_recent_activity = await WalletTransactionsRepo.exists_since(
            session,
            wallet_id=wallet.id,
            since_utc=window_start,
        )
        if has_recent_activity:
            logger.info("wallet_expiration_skipped_recent_activity", wallet_id=str(wallet.id))
            return None

        expired_amount = wallet.balance
        await WalletTransactionsRepo.create(
            session,
            transaction=WalletTransaction(
                wallet_id=wallet.id,
                user_id=wallet.user_id,
                amount=-expired_amount,
                type=TRANSACTION_TYPE_EXPIRATION,
                description=EXPIRATION_DESCRIPTION,
                idempotency_key=f"expiration:{wallet.id}:{now_utc.date().isoformat()}",
                created_at=now_utc,
            ),
        )
        wallet.balance = Decimal("0.00")
        wallet.updated_at = now_utc
        await session.flush()
        return expired_amount
