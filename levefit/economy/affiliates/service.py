from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.core.config import get_settings
from levefit.core.local_time import local_midnight_utc
from levefit.core.referral_codes import generate_referral_code, normalize_referral_code
from levefit.db.models.affiliate_sales import AffiliateSale
from levefit.db.models.affiliates import Affiliate
from levefit.db.models.pix_withdrawals import PixWithdrawal
from levefit.db.repo.affiliate_sales_repo import AffiliateSalesRepo
from levefit.db.repo.affiliates_repo import AffiliatesRepo
from levefit.db.repo.pix_withdrawals_repo import PixWithdrawalsRepo
from levefit.db.repo.profiles_repo import ProfilesRepo
from levefit.economy.affiliates.constants import (
    AFFILIATE_CODE_GENERATION_ATTEMPTS,
    AFFILIATE_CODE_PREFIX,
    COMMITTED_WITHDRAWAL_STATUSES,
    RANKING_LIMIT,
    SALE_STATUS_APPROVED,
    WITHDRAWAL_STATUS_PAID,
    WITHDRAWAL_STATUS_PENDING,
)
from levefit.economy.affiliates.errors import (
    AffiliateCodeGenerationError,
    AffiliateNotFoundError,
    WithdrawalNotFoundError,
)
from levefit.economy.affiliates.rules import (
    available_balance,
    calculate_commission,
    validate_withdrawal_request,
    validate_withdrawal_transition,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AffiliateOverview:
    affiliate: Affiliate
    affiliate_link: str
    available_balance: Decimal
    sales: list[AffiliateSale]
    withdrawals: list[PixWithdrawal]


@dataclass(frozen=True, slots=True)
class RankingEntry:
    rank_position: int
    affiliate_name: str
    affiliate_code: str
    sales_count: int
    total_commission: Decimal


def build_affiliate_link(affiliate_code: str) -> str:
    return f"{get_settings().public_app_url}/store?aff={affiliate_code}"


def month_bounds_utc(month: date) -> tuple[datetime, datetime]:
    month_start = month.replace(day=1)
    if month_start.month == 12:
        next_month = month_start.replace(year=month_start.year + 1, month=1)
    else:
        next_month = month_start.replace(month=month_start.month + 1)
    return local_midnight_utc(month_start), local_midnight_utc(next_month)


class AffiliateService:
    @staticmethod
    async def activate(session: AsyncSession, *, user_id: UUID, now_utc: datetime) -> Affiliate:
        existing = await AffiliatesRepo.get_by_user_id(session, user_id)
        if existing is not None:
            return existing

        for _ in range(AFFILIATE_CODE_GENERATION_ATTEMPTS):
            code = generate_referral_code(prefix=AFFILIATE_CODE_PREFIX)
            if await AffiliatesRepo.code_exists(session, code):
                continue
            affiliate = await AffiliatesRepo.create(
                session,
                affiliate=Affiliate(
                    user_id=user_id,
                    affiliate_code=code,
                    is_active=True,
                    total_sales=0,
                    total_commission=Decimal("0.00"),
                    created_at=now_utc,
                ),
            )
            logger.info("affiliate_activated", user_id=str(user_id), affiliate_code=code)
            return affiliate

        raise AffiliateCodeGenerationError

    @staticmethod
    async def _available_for(session: AsyncSession, affiliate: Affiliate) -> Decimal:
        committed = await PixWithdrawalsRepo.sum_committed_for_affiliate(
            session,
            affiliate_id=affiliate.id,
            statuses=COMMITTED_WITHDRAWAL_STATUSES,
        )
        return available_balance(
            total_commission=affiliate.total_commission,
            committed_withdrawals=committed,
        )

    @staticmethod
    async def get_overview(session: AsyncSession, *, user_id: UUID) -> AffiliateOverview:
        affiliate = await AffiliatesRepo.get_by_user_id(session, user_id)
        if affiliate is None:
            raise AffiliateNotFoundError

        return AffiliateOverview(
            affiliate=affiliate,
            affiliate_link=build_affiliate_link(affiliate.affiliate_code),
            available_balance=await AffiliateService._available_for(session, affiliate),
            sales=await AffiliateSalesRepo.list_for_affiliate(session, affiliate_id=affiliate.id),
            withdrawals=await PixWithdrawalsRepo.list_for_affiliate(
                session,
                affiliate_id=affiliate.id,
            ),
        )

    @staticmethod
    async def record_sale(
        session: AsyncSession,
        *,
        affiliate_code: str,
        order_id: str,
        sale_amount: Decimal,
        customer_email: str | None,
        now_utc: datetime,
    ) -> AffiliateSale | None:
        code = normalize_referral_code(affiliate_code)
        if code is None or sale_amount <= 0:
            return None

        affiliate = await AffiliatesRepo.get_by_code_for_update(session, code)
        if affiliate is None or not affiliate.is_active:
            logger.warning("affiliate_sale_unknown_code", affiliate_code=code, order_id=order_id)
            return None

        existing = await AffiliateSalesRepo.get_by_order_id(session, order_id)
        if existing is not None:
            return existing

        commission = calculate_commission(sale_amount)
        sale = await AffiliateSalesRepo.create(
            session,
            sale=AffiliateSale(
                affiliate_id=affiliate.id,
                order_id=order_id,
                sale_amount=sale_amount,
                commission_amount=commission,
                customer_email=customer_email,
                status=SALE_STATUS_APPROVED,
                created_at=now_utc,
            ),
        )
        affiliate.total_sales += 1
        affiliate.total_commission = affiliate.total_commission + commission
        await session.flush()

        logger.info(
            "affiliate_sale_recorded",
            affiliate_id=str(affiliate.id),
            order_id=order_id,
            commission=str(commission),
        )
        return sale

    @staticmethod
    async def request_withdrawal(
        session: AsyncSession,
        *,
        user_id: UUID,
        amount: Decimal,
        pix_key: str,
        pix_key_type: str,
        now_utc: datetime,
    ) -> PixWithdrawal:
        affiliate = await AffiliatesRepo.get_by_user_id_for_update(session, user_id)
        if affiliate is None:
            raise AffiliateNotFoundError

        validate_withdrawal_request(
            amount=amount,
            available=await AffiliateService._available_for(session, affiliate),
            has_pending=await PixWithdrawalsRepo.has_pending_for_affiliate(
                session,
                affiliate_id=affiliate.id,
            ),
        )

        withdrawal = await PixWithdrawalsRepo.create(
            session,
            withdrawal=PixWithdrawal(
                affiliate_id=affiliate.id,
                user_id=user_id,
                amount=amount,
                pix_key=pix_key,
                pix_key_type=pix_key_type,
                status=WITHDRAWAL_STATUS_PENDING,
                requested_at=now_utc,
            ),
        )
        affiliate.pix_key = pix_key
        affiliate.pix_key_type = pix_key_type
        await session.flush()

        logger.info(
            "affiliate_withdrawal_requested",
            affiliate_id=str(affiliate.id),
            amount=str(amount),
        )
        return withdrawal

    @staticmethod
    async def review_withdrawal(
        session: AsyncSession,
        *,
        withdrawal_id: UUID,
        admin_id: UUID,
        decision: str,
        notes: str | None,
        now_utc: datetime,
    ) -> PixWithdrawal:
        withdrawal = await PixWithdrawalsRepo.get_by_id_for_update(session, withdrawal_id)
        if withdrawal is None:
            raise WithdrawalNotFoundError

        validate_withdrawal_transition(current_status=withdrawal.status, decision=decision)
        withdrawal.status = decision
        withdrawal.reviewed_at = now_utc
        withdrawal.reviewed_by = admin_id
        if notes is not None:
            withdrawal.admin_notes = notes
        await session.flush()

        logger.info(
            "affiliate_withdrawal_reviewed",
            withdrawal_id=str(withdrawal.id),
            decision=decision,
            paid=decision == WITHDRAWAL_STATUS_PAID,
        )
        return withdrawal

    @staticmethod
    async def monthly_ranking(
        session: AsyncSession,
        *,
        month: date,
        limit: int = RANKING_LIMIT,
    ) -> list[RankingEntry]:
        from_utc, to_utc = month_bounds_utc(month)
        rows = await AffiliateSalesRepo.aggregate_by_affiliate_between(
            session,
            from_utc=from_utc,
            to_utc=to_utc,
        )
        rows = rows[:limit]
        affiliates = {
            affiliate.id: affiliate
            for affiliate in await AffiliatesRepo.list_by_ids(
                session,
                [affiliate_id for affiliate_id, _, _ in rows],
            )
        }
        profiles = {
            profile.user_id: profile
            for profile in await ProfilesRepo.list_by_user_ids(
                session,
                [affiliate.user_id for affiliate in affiliates.values()],
            )
        }

        ranking: list[RankingEntry] = []
        for position, (affiliate_id, sales_count, commission) in enumerate(rows, start=1):
            affiliate = affiliates.get(affiliate_id)
            if affiliate is None:
                continue
            profile = profiles.get(affiliate.user_id)
            ranking.append(
                RankingEntry(
                    rank_position=position,
                    affiliate_name=profile.name if profile is not None else "",
                    affiliate_code=affiliate.affiliate_code,
                    sales_count=sales_count,
                    total_commission=commission,
                )
            )
        return ranking
