from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from levefit.api.routes.request_auth import require_user
from levefit.db.session import SessionLocal
from levefit.economy.points.errors import InsufficientPointsError, RewardNotFoundError
from levefit.economy.points.service import PointsService

router = APIRouter(tags=["points"])


class PointsHistoryResponse(BaseModel):
    id: str
    action: str
    points: int
    description: str | None
    created_at: datetime


class RewardResponse(BaseModel):
    id: str
    name: str
    description: str | None
    points_cost: int


class PointsOverviewResponse(BaseModel):
    points: int
    history: list[PointsHistoryResponse]
    rewards: list[RewardResponse]


class RedeemRewardResponse(BaseModel):
    redemption_id: str
    remaining_points: int


@router.get("/points", response_model=PointsOverviewResponse)
async def get_points(request: Request) -> PointsOverviewResponse:
    user = require_user(request)
    async with SessionLocal.begin() as session:
        overview = await PointsService.get_overview(session, user_id=user.user_id)

    return PointsOverviewResponse(
        points=overview.points,
        history=[
            PointsHistoryResponse(
                id=str(entry.id),
                action=entry.action,
                points=entry.points,
                description=entry.description,
                created_at=entry.created_at,
            )
            for entry in overview.history
        ],
        rewards=[
            RewardResponse(
                id=str(reward.id),
                name=reward.name,
                description=reward.description,
                points_cost=reward.points_cost,
            )
            for reward in overview.rewards
        ],
    )


@router.post("/points/rewards/{reward_id}/redeem", response_model=RedeemRewardResponse)
async def redeem_reward(reward_id: UUID, request: Request) -> RedeemRewardResponse:
    user = require_user(request)
    try:
        async with SessionLocal.begin() as session:
            result = await PointsService.redeem_reward(
                session,
                user_id=user.user_id,
                reward_id=reward_id,
                now_utc=datetime.now(timezone.utc),
            )
    except RewardNotFoundError as exc:
        raise HTTPException(status_code=404, detail={"code": "E_REWARD_NOT_FOUND"}) from exc
    except InsufficientPointsError as exc:
        raise HTTPException(status_code=409, detail={"code": "E_INSUFFICIENT_POINTS"}) from exc

    return RedeemRewardResponse(
        redemption_id=str(result.redemption_id),
        remaining_points=result.remaining_points,
    )
