from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

import structlog
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from levefit.api.routes.request_auth import require_admin, require_user
from levefit.db.models.profiles import Profile
from levefit.db.models.referrals import Referral
from levefit.db.repo.profiles_repo import ProfilesRepo
from levefit.db.repo.referrals_repo import ReferralsRepo
from levefit.db.session import SessionLocal
from levefit.economy.habits.errors import ProfileNotFoundError
from levefit.economy.habits.service import HabitsService
from levefit.economy.wallet.constants import AWAITING_APPROVAL_STATUSES
from levefit.economy.wallet.errors import (
    DuplicateReferralOrderError,
    ReferralAlreadyApprovedError,
    ReferralCodeNotFoundError,
    ReferralNotFoundError,
)
from levefit.economy.wallet.service import WalletService

router = APIRouter(tags=["admin"])
logger = structlog.get_logger(__name__)


class PendingProfileResponse(BaseModel):
    user_id: str
    name: str
    email: str | None
    kit_type: str | None
    created_at: datetime


class ProfileApprovalResponse(BaseModel):
    user_id: str
    is_approved: bool
    state_version: int


class ReferralResponse(BaseModel):
    id: str
    referrer_id: str
    referral_code: str
    referred_email: str | None
    kiwify_order_id: str | None
    status: str
    credit_amount: float
    created_at: datetime


class RegisterConversionRequest(BaseModel):
    referral_code: str = Field(min_length=1, max_length=32)
    referred_email: str | None = Field(default=None, max_length=320)
    kiwify_order_id: str | None = Field(default=None, max_length=128)


class ReferralApprovalResponse(BaseModel):
    referral_id: str
    referrer_id: str
    credit_amount: float
    new_balance: float


def _pending_profile_response(profile: Profile) -> PendingProfileResponse:
    return PendingProfileResponse(
        user_id=str(profile.user_id),
        name=profile.name,
        email=profile.email,
        kit_type=profile.kit_type,
        created_at=profile.created_at,
    )


def _referral_response(referral: Referral) -> ReferralResponse:
    return ReferralResponse(
        id=str(referral.id),
        referrer_id=str(referral.referrer_id),
        referral_code=referral.referral_code,
        referred_email=referral.referred_email,
        kiwify_order_id=referral.kiwify_order_id,
        status=referral.status,
        credit_amount=float(referral.credit_amount or Decimal("0")),
        created_at=referral.created_at,
    )


@router.get("/admin/profiles/pending", response_model=list[PendingProfileResponse])
async def list_pending_profiles(request: Request) -> list[PendingProfileResponse]:
    user = require_user(request)
    async with SessionLocal.begin() as session:
        await require_admin(session, user)
        profiles = await ProfilesRepo.list_pending_approval(session)
    return [_pending_profile_response(profile) for profile in profiles]


@router.post("/admin/profiles/{user_id}/approve", response_model=ProfileApprovalResponse)
async def approve_profile(user_id: UUID, request: Request) -> ProfileApprovalResponse:
    admin = require_user(request)
    try:
        async with SessionLocal.begin() as session:
            await require_admin(session, admin)
            profile = await HabitsService.approve_profile(
                session,
                user_id=user_id,
                now_utc=datetime.now(timezone.utc),
            )
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=404, detail={"code": "E_PROFILE_NOT_FOUND"}) from exc

    logger.info("admin_profile_approved", user_id=str(user_id), admin_id=str(admin.user_id))
    return ProfileApprovalResponse(
        user_id=str(profile.user_id),
        is_approved=profile.is_approved,
        state_version=profile.state_version,
    )


@router.get("/admin/referrals/pending", response_model=list[ReferralResponse])
async def list_pending_referrals(request: Request) -> list[ReferralResponse]:
    user = require_user(request)
    async with SessionLocal.begin() as session:
        await require_admin(session, user)
        referrals = await ReferralsRepo.list_by_statuses(session, statuses=AWAITING_APPROVAL_STATUSES)
    return [_referral_response(referral) for referral in referrals]


@router.post("/admin/referrals", response_model=ReferralResponse)
async def register_conversion(payload: RegisterConversionRequest, request: Request) -> ReferralResponse:
    admin = require_user(request)
    try:
        async with SessionLocal.begin() as session:
            await require_admin(session, admin)
            referral = await WalletService.register_conversion(
                session,
                referral_code=payload.referral_code,
                referred_email=payload.referred_email or None,
                kiwify_order_id=payload.kiwify_order_id or None,
                now_utc=datetime.now(timezone.utc),
            )
    except ReferralCodeNotFoundError as exc:
        raise HTTPException(status_code=404, detail={"code": "E_REFERRAL_CODE_NOT_FOUND"}) from exc
    except DuplicateReferralOrderError as exc:
        raise HTTPException(status_code=409, detail={"code": "E_REFERRAL_ORDER_DUPLICATE"}) from exc
    return _referral_response(referral)


@router.post("/admin/referrals/{referral_id}/approve", response_model=ReferralApprovalResponse)
async def approve_referral(referral_id: UUID, request: Request) -> ReferralApprovalResponse:
    admin = require_user(request)
    try:
        async with SessionLocal.begin() as session:
            await require_admin(session, admin)
            result = await WalletService.approve_referral(
                session,
                referral_id=referral_id,
                now_utc=datetime.now(timezone.utc),
            )
    except ReferralNotFoundError as exc:
        raise HTTPException(status_code=404, detail={"code": "E_REFERRAL_NOT_FOUND"}) from exc
    except ReferralAlreadyApprovedError as exc:
        raise HTTPException(status_code=409, detail={"code": "E_REFERRAL_ALREADY_APPROVED"}) from exc

    logger.info(
        "admin_referral_approved",
        referral_id=str(referral_id),
        admin_id=str(admin.user_id),
        credit_amount=str(result.credit_amount),
    )
    return ReferralApprovalResponse(
        referral_id=str(result.referral_id),
        referrer_id=str(result.referrer_id),
        credit_amount=float(result.credit_amount),
        new_balance=float(result.new_balance),
    )
