from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Literal

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from levefit.api.routes.request_auth import require_user
from levefit.core.local_time import local_date
from levefit.db.session import SessionLocal
from levefit.economy.goal_progress.service import GoalProgressService
from levefit.economy.habits.errors import InvalidMeasurementError
from levefit.economy.habits.service import HabitsService

router = APIRouter(tags=["progress"])


class BandProgressResponse(BaseModel):
    index: int
    points: int
    ratios: dict[str, float]
    earned: float
    complete: bool


class GoalProgressResponse(BaseModel):
    total_progress: int = Field(ge=0, le=100)
    current_band: int
    counts: dict[str, int]
    targets: dict[str, int]
    bands: list[BandProgressResponse]


class WaterStreakResponse(BaseModel):
    current_streak: int
    total_days_met_goal: int


class WaterIntakeRequest(BaseModel):
    amount_ml: int
    day: date | None = None


class WaterIntakeResponse(BaseModel):
    day: date
    total_intake: int
    goal: int
    streak: WaterStreakResponse


class CapsuleRequest(BaseModel):
    day: date | None = None


class CompleteItemRequest(BaseModel):
    item_id: str = Field(min_length=1, max_length=128)
    item_name: str = Field(min_length=1, max_length=200)


@router.get("/progress/goal", response_model=GoalProgressResponse)
async def get_goal_progress(request: Request) -> GoalProgressResponse:
    user = require_user(request)
    async with SessionLocal.begin() as session:
        snapshot = await GoalProgressService.get_for_user(session, user_id=user.user_id)

    return GoalProgressResponse(
        total_progress=snapshot.result.total,
        current_band=snapshot.result.current_band,
        counts=snapshot.counts.as_dict(),
        targets=snapshot.targets,
        bands=[
            BandProgressResponse(
                index=band.index,
                points=band.points,
                ratios=band.ratios,
                earned=band.earned,
                complete=band.complete,
            )
            for band in snapshot.result.bands
        ],
    )


@router.post("/habits/water", response_model=WaterIntakeResponse)
async def add_water_intake(payload: WaterIntakeRequest, request: Request) -> WaterIntakeResponse:
    user = require_user(request)
    now_utc = datetime.now(timezone.utc)
    try:
        async with SessionLocal.begin() as session:
            result = await HabitsService.add_water_intake(
                session,
                user_id=user.user_id,
                day=payload.day or local_date(now_utc),
                amount_ml=payload.amount_ml,
                now_utc=now_utc,
            )
    except InvalidMeasurementError as exc:
        raise HTTPException(status_code=422, detail={"code": "E_INVALID_WATER_AMOUNT"}) from exc

    return WaterIntakeResponse(
        day=result.day,
        total_intake=result.total_intake,
        goal=result.goal,
        streak=WaterStreakResponse(
            current_streak=result.streak.current_streak,
            total_days_met_goal=result.streak.total_days_met_goal,
        ),
    )


@router.get("/habits/water/streak", response_model=WaterStreakResponse)
async def get_water_streak(request: Request) -> WaterStreakResponse:
    user = require_user(request)
    async with SessionLocal.begin() as session:
        streak = await HabitsService.get_water_streak(
            session,
            user_id=user.user_id,
            today=local_date(datetime.now(timezone.utc)),
        )
    return WaterStreakResponse(
        current_streak=streak.current_streak,
        total_days_met_goal=streak.total_days_met_goal,
    )


@router.post("/habits/capsules")
async def mark_capsule_taken(payload: CapsuleRequest, request: Request) -> dict[str, object]:
    user = require_user(request)
    day = payload.day or local_date(datetime.now(timezone.utc))
    async with SessionLocal.begin() as session:
        created = await HabitsService.mark_capsule_taken(session, user_id=user.user_id, day=day)
    return {"day": day.isoformat(), "created": created}


@router.post("/habits/completed/{kind}")
async def complete_item(
    kind: Literal["exercise", "recipe", "detox"],
    payload: CompleteItemRequest,
    request: Request,
) -> dict[str, object]:
    user = require_user(request)
    async with SessionLocal.begin() as session:
        created = await HabitsService.complete_item(
            session,
            kind=kind,
            user_id=user.user_id,
            item_id=payload.item_id,
            item_name=payload.item_name,
            now_utc=datetime.now(timezone.utc),
        )
    return {"kind": kind, "item_id": payload.item_id, "created": created}
