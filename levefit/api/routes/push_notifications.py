from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal
from uuid import UUID

import structlog
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from levefit.api.routes.request_auth import is_admin, require_user
from levefit.db.session import SessionLocal
from levefit.economy.notifications.constants import NOTIFICATION_TYPE_TEST
from levefit.economy.notifications.service import NotificationService
from levefit.economy.notifications.subscriptions import PushSubscriptionService

router = APIRouter(tags=["push"])
logger = structlog.get_logger(__name__)


class SendPushRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["test", "capsule", "water", "treatment_end", "daily_summary"]
    user_id: UUID | None = Field(default=None, alias="userId")


class SendPushResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    sent: int
    failed: int
    target_users: int = Field(serialization_alias="targetUsers")


class PushSubscriptionKeys(BaseModel):
    p256dh: str = Field(min_length=1)
    auth: str = Field(min_length=1)


class SavePushSubscriptionRequest(BaseModel):
    endpoint: str = Field(min_length=1, max_length=2048)
    keys: PushSubscriptionKeys


class DeletePushSubscriptionRequest(BaseModel):
    endpoint: str = Field(min_length=1, max_length=2048)


@router.post(
    "/send-push-notification",
    response_model=SendPushResponse,
    response_model_by_alias=True,
)
async def send_push_notification(payload: SendPushRequest, request: Request) -> SendPushResponse:
    user = require_user(request)
    target_user_id = payload.user_id
    if payload.type == NOTIFICATION_TYPE_TEST and target_user_id is None:
        target_user_id = user.user_id
    needs_admin = payload.type != NOTIFICATION_TYPE_TEST or target_user_id != user.user_id

    async with SessionLocal.begin() as session:
        if needs_admin and not await is_admin(session, user):
            logger.warning(
                "push_send_forbidden",
                user_id=str(user.user_id),
                notification_type=payload.type,
            )
            raise HTTPException(status_code=403, detail={"code": "E_FORBIDDEN"})

        result = await NotificationService.send(
            session,
            notification_type=payload.type,
            target_user_id=target_user_id if payload.type == NOTIFICATION_TYPE_TEST else None,
            now_utc=datetime.now(timezone.utc),
        )

    return SendPushResponse(
        success=True,
        sent=result.sent,
        failed=result.failed,
        target_users=result.target_users,
    )


@router.post("/push/subscriptions")
async def save_push_subscription(
    payload: SavePushSubscriptionRequest,
    request: Request,
) -> dict[str, bool]:
    user = require_user(request)
    async with SessionLocal.begin() as session:
        await PushSubscriptionService.save(
            session,
            user_id=user.user_id,
            endpoint=payload.endpoint,
            p256dh=payload.keys.p256dh,
            auth=payload.keys.auth,
            now_utc=datetime.now(timezone.utc),
        )
    return {"success": True}


@router.delete("/push/subscriptions")
async def delete_push_subscription(
    payload: DeletePushSubscriptionRequest,
    request: Request,
) -> dict[str, bool]:
    user = require_user(request)
    async with SessionLocal.begin() as session:
        removed = await PushSubscriptionService.remove(
            session,
            user_id=user.user_id,
            endpoint=payload.endpoint,
        )
    return {"success": True, "removed": removed}
