from __future__ import annotations

from fastapi import APIRouter, Request

from levefit.api.routes.request_auth import assert_internal_access
from levefit.workers.tasks.milestone_notifications_async import run_milestone_notifications_async
from levefit.workers.tasks.wallet_expiration_async import run_wallet_expiration_async

router = APIRouter(tags=["internal", "jobs"])


@router.post("/internal/jobs/expire-wallet-credits")
async def expire_wallet_credits(request: Request) -> dict[str, object]:
    assert_internal_access(request)
    return await run_wallet_expiration_async()


@router.post("/internal/jobs/milestone-notifications")
async def milestone_notifications(request: Request) -> dict[str, object]:
    assert_internal_access(request)
    return await run_milestone_notifications_async()
