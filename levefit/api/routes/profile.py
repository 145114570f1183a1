from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Literal

import structlog
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from levefit.api.routes.request_auth import require_user
from levefit.core.local_time import local_date
from levefit.db.models.profiles import Profile
from levefit.db.repo.profiles_repo import ProfilesRepo
from levefit.db.session import SessionLocal
from levefit.economy.habits.errors import (
    InvalidMeasurementError,
    ProfileNotFoundError,
    StaleProfileVersionError,
)
from levefit.economy.habits.kits import days_remaining, treatment_day
from levefit.economy.habits.service import HabitsService
from levefit.economy.habits.signup_email import build_new_user_email
from levefit.services.email_delivery import send_admin_email

router = APIRouter(tags=["profile"])
logger = structlog.get_logger(__name__)

KitType = Literal["1_pote", "2_potes", "3_potes", "5_potes"]


class ProfileResponse(BaseModel):
    user_id: str
    name: str
    treatment_start_date: date | None
    kit_type: str | None
    is_approved: bool
    weight: float | None
    height: float | None
    imc: float | None
    imc_category: str | None
    water_goal: int
    onboarding_completed: bool
    push_activated: bool
    state_version: int
    treatment_day: int | None
    days_remaining: int | None


class ProfileUpdateRequest(BaseModel):
    expected_version: int | None = Field(default=None, ge=1)
    name: str | None = Field(default=None, min_length=1, max_length=200)
    treatment_start_date: date | None = None
    kit_type: KitType | None = None
    water_goal: int | None = Field(default=None, ge=500, le=6000)
    onboarding_completed: bool | None = None
    push_activated: bool | None = None


class ImcUpdateRequest(BaseModel):
    weight_kg: Decimal = Field(gt=0, le=500)
    height_cm: Decimal = Field(gt=0, le=300)


def _optional_float(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None


def _profile_response(profile: Profile, *, today: date) -> ProfileResponse:
    start = profile.treatment_start_date
    return ProfileResponse(
        user_id=str(profile.user_id),
        name=profile.name,
        treatment_start_date=start,
        kit_type=profile.kit_type,
        is_approved=profile.is_approved,
        weight=_optional_float(profile.weight),
        height=_optional_float(profile.height),
        imc=_optional_float(profile.imc),
        imc_category=profile.imc_category,
        water_goal=profile.water_goal,
        onboarding_completed=profile.onboarding_completed,
        push_activated=profile.push_activated,
        state_version=profile.state_version,
        treatment_day=treatment_day(start_date=start, today=today) if start else None,
        days_remaining=(
            days_remaining(start_date=start, kit_type=profile.kit_type, today=today)
            if start
            else None
        ),
    )


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(request: Request) -> ProfileResponse:
    user = require_user(request)
    async with SessionLocal.begin() as session:
        profile = await ProfilesRepo.get_by_user_id(session, user.user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail={"code": "E_PROFILE_NOT_FOUND"})
    return _profile_response(profile, today=local_date(datetime.now(timezone.utc)))


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(payload: ProfileUpdateRequest, request: Request) -> ProfileResponse:
    user = require_user(request)
    now_utc = datetime.now(timezone.utc)
    changes = payload.model_dump(exclude_unset=True, exclude={"expected_version"})
    try:
        async with SessionLocal.begin() as session:
            profile = await HabitsService.save_profile(
                session,
                user_id=user.user_id,
                expected_version=payload.expected_version,
                changes=changes,
                now_utc=now_utc,
                email=user.email,
            )
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=404, detail={"code": "E_PROFILE_NOT_FOUND"}) from exc
    except StaleProfileVersionError as exc:
        logger.info("profile_write_conflict", user_id=str(user.user_id))
        raise HTTPException(status_code=409, detail={"code": "E_PROFILE_VERSION_CONFLICT"}) from exc

    if payload.expected_version is None:
        subject, html = build_new_user_email(profile)
        await send_admin_email(subject=subject, html=html, event="new_user_registered")

    return _profile_response(profile, today=local_date(now_utc))


@router.put("/profile/imc", response_model=ProfileResponse)
async def update_imc(payload: ImcUpdateRequest, request: Request) -> ProfileResponse:
    user = require_user(request)
    now_utc = datetime.now(timezone.utc)
    try:
        async with SessionLocal.begin() as session:
            profile = await HabitsService.update_imc(
                session,
                user_id=user.user_id,
                weight_kg=payload.weight_kg,
                height_cm=payload.height_cm,
                now_utc=now_utc,
            )
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=404, detail={"code": "E_PROFILE_NOT_FOUND"}) from exc
    except InvalidMeasurementError as exc:
        raise HTTPException(status_code=422, detail={"code": "E_INVALID_MEASUREMENT"}) from exc

    return _profile_response(profile, today=local_date(now_utc))
