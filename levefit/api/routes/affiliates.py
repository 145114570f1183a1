from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Literal
from uuid import UUID

import structlog
from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel, Field

from levefit.api.routes.request_auth import require_admin, require_user
from levefit.core.local_time import local_date
from levefit.db.models.pix_withdrawals import PixWithdrawal
from levefit.db.session import SessionLocal
from levefit.economy.affiliates.errors import (
    AffiliateCodeGenerationError,
    AffiliateNotFoundError,
    WithdrawalAlreadyPendingError,
    WithdrawalBelowMinimumError,
    WithdrawalExceedsBalanceError,
    WithdrawalNotFoundError,
    WithdrawalTransitionError,
)
from levefit.economy.affiliates.service import AffiliateService, build_affiliate_link

router = APIRouter(tags=["affiliates"])
logger = structlog.get_logger(__name__)

PixKeyType = Literal["cpf", "cnpj", "email", "phone", "random"]


class AffiliateResponse(BaseModel):
    id: str
    affiliate_code: str
    affiliate_link: str
    is_active: bool
    total_sales: int
    total_commission: float


class AffiliateSaleResponse(BaseModel):
    id: str
    order_id: str
    sale_amount: float
    commission_amount: float
    status: str
    created_at: datetime


class WithdrawalResponse(BaseModel):
    id: str
    amount: float
    pix_key: str
    pix_key_type: str
    status: str
    admin_notes: str | None
    requested_at: datetime
    reviewed_at: datetime | None


class AffiliateOverviewResponse(BaseModel):
    affiliate: AffiliateResponse
    available_balance: float
    sales: list[AffiliateSaleResponse]
    withdrawals: list[WithdrawalResponse]


class WithdrawalRequest(BaseModel):
    amount: Decimal = Field(gt=0)
    pix_key: str = Field(min_length=1, max_length=140)
    pix_key_type: PixKeyType


class WithdrawalReviewRequest(BaseModel):
    decision: Literal["approved", "rejected", "paid"]
    notes: str | None = Field(default=None, max_length=1000)


class RankingEntryResponse(BaseModel):
    rank_position: int
    affiliate_name: str
    affiliate_code: str
    sales_count: int
    total_commission: float


class RankingResponse(BaseModel):
    month: date
    entries: list[RankingEntryResponse]


def _withdrawal_response(withdrawal: PixWithdrawal) -> WithdrawalResponse:
    return WithdrawalResponse(
        id=str(withdrawal.id),
        amount=float(withdrawal.amount),
        pix_key=withdrawal.pix_key,
        pix_key_type=withdrawal.pix_key_type,
        status=withdrawal.status,
        admin_notes=withdrawal.admin_notes,
        requested_at=withdrawal.requested_at,
        reviewed_at=withdrawal.reviewed_at,
    )


@router.post("/affiliates/activate", response_model=AffiliateResponse)
async def activate_affiliate(request: Request) -> AffiliateResponse:
    user = require_user(request)
    try:
        async with SessionLocal.begin() as session:
            affiliate = await AffiliateService.activate(
                session,
                user_id=user.user_id,
                now_utc=datetime.now(timezone.utc),
            )
    except AffiliateCodeGenerationError as exc:
        raise HTTPException(status_code=503, detail={"code": "E_AFFILIATE_CODE_UNAVAILABLE"}) from exc

    return AffiliateResponse(
        id=str(affiliate.id),
        affiliate_code=affiliate.affiliate_code,
        affiliate_link=build_affiliate_link(affiliate.affiliate_code),
        is_active=affiliate.is_active,
        total_sales=affiliate.total_sales,
        total_commission=float(affiliate.total_commission),
    )


@router.get("/affiliates/me", response_model=AffiliateOverviewResponse)
async def get_my_affiliate(request: Request) -> AffiliateOverviewResponse:
    user = require_user(request)
    try:
        async with SessionLocal.begin() as session:
            overview = await AffiliateService.get_overview(session, user_id=user.user_id)
    except AffiliateNotFoundError as exc:
        raise HTTPException(status_code=404, detail={"code": "E_AFFILIATE_NOT_FOUND"}) from exc

    affiliate = overview.affiliate
    return AffiliateOverviewResponse(
        affiliate=AffiliateResponse(
            id=str(affiliate.id),
            affiliate_code=affiliate.affiliate_code,
            affiliate_link=overview.affiliate_link,
            is_active=affiliate.is_active,
            total_sales=affiliate.total_sales,
            total_commission=float(affiliate.total_commission),
        ),
        available_balance=float(overview.available_balance),
        sales=[
            AffiliateSaleResponse(
                id=str(sale.id),
                order_id=sale.order_id,
                sale_amount=float(sale.sale_amount),
                commission_amount=float(sale.commission_amount),
                status=sale.status,
                created_at=sale.created_at,
            )
            for sale in overview.sales
        ],
        withdrawals=[_withdrawal_response(item) for item in overview.withdrawals],
    )


@router.post("/affiliates/withdrawals", response_model=WithdrawalResponse)
async def request_withdrawal(payload: WithdrawalRequest, request: Request) -> WithdrawalResponse:
    user = require_user(request)
    try:
        async with SessionLocal.begin() as session:
            withdrawal = await AffiliateService.request_withdrawal(
                session,
                user_id=user.user_id,
                amount=payload.amount,
                pix_key=payload.pix_key.strip(),
                pix_key_type=payload.pix_key_type,
                now_utc=datetime.now(timezone.utc),
            )
    except AffiliateNotFoundError as exc:
        raise HTTPException(status_code=404, detail={"code": "E_AFFILIATE_NOT_FOUND"}) from exc
    except WithdrawalBelowMinimumError as exc:
        raise HTTPException(status_code=422, detail={"code": "E_WITHDRAWAL_BELOW_MINIMUM"}) from exc
    except WithdrawalExceedsBalanceError as exc:
        raise HTTPException(status_code=422, detail={"code": "E_INSUFFICIENT_BALANCE"}) from exc
    except WithdrawalAlreadyPendingError as exc:
        raise HTTPException(status_code=409, detail={"code": "E_WITHDRAWAL_PENDING"}) from exc

    return _withdrawal_response(withdrawal)


@router.get("/affiliates/ranking", response_model=RankingResponse)
async def get_affiliate_ranking(
    request: Request,
    month: date | None = Query(default=None),
) -> RankingResponse:
    require_user(request)
    now_utc = datetime.now(timezone.utc)
    target_month = (month or local_date(now_utc)).replace(day=1)
    async with SessionLocal.begin() as session:
        entries = await AffiliateService.monthly_ranking(session, month=target_month)

    return RankingResponse(
        month=target_month,
        entries=[
            RankingEntryResponse(
                rank_position=entry.rank_position,
                affiliate_name=entry.affiliate_name,
                affiliate_code=entry.affiliate_code,
                sales_count=entry.sales_count,
                total_commission=float(entry.total_commission),
            )
            for entry in entries
        ],
    )


@router.post("/admin/withdrawals/{withdrawal_id}/review", response_model=WithdrawalResponse)
async def review_withdrawal(
    withdrawal_id: UUID,
    payload: WithdrawalReviewRequest,
    request: Request,
) -> WithdrawalResponse:
    user = require_user(request)
    try:
        async with SessionLocal.begin() as session:
            await require_admin(session, user)
            withdrawal = await AffiliateService.review_withdrawal(
                session,
                withdrawal_id=withdrawal_id,
                admin_id=user.user_id,
                decision=payload.decision,
                notes=payload.notes,
                now_utc=datetime.now(timezone.utc),
            )
    except WithdrawalNotFoundError as exc:
        raise HTTPException(status_code=404, detail={"code": "E_WITHDRAWAL_NOT_FOUND"}) from exc
    except WithdrawalTransitionError as exc:
        raise HTTPException(status_code=409, detail={"code": "E_WITHDRAWAL_TRANSITION"}) from exc

    logger.info(
        "admin_withdrawal_reviewed",
        withdrawal_id=str(withdrawal.id),
        admin_id=str(user.user_id),
        decision=payload.decision,
    )
    return _withdrawal_response(withdrawal)
