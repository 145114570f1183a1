from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from levefit.core.config import get_settings
from levefit.db.session import SessionLocal
from levefit.economy.checkout.service import CheckoutService
from levefit.services.stripe_client import StripeSignatureError, construct_webhook_event

router = APIRouter(tags=["stripe"])
logger = structlog.get_logger(__name__)


@router.post("/stripe-webhook")
async def stripe_webhook(request: Request) -> JSONResponse:
    secret = get_settings().stripe_webhook_secret
    if not secret:
        logger.error("stripe_webhook_secret_not_configured")
        return JSONResponse(status_code=500, content={"error": "Webhook not configured"})

    now_utc = datetime.now(timezone.utc)
    raw_body = await request.body()
    try:
        event = construct_webhook_event(
            payload=raw_body,
            signature_header=request.headers.get("stripe-signature"),
            secret=secret,
        )
    except StripeSignatureError as exc:
        logger.warning("stripe_webhook_invalid_signature", reason=str(exc))
        return JSONResponse(status_code=401, content={"error": "Invalid signature"})
    except ValueError:
        logger.warning("stripe_webhook_invalid_payload")
        return JSONResponse(status_code=400, content={"error": "Invalid payload"})

    try:
        async with SessionLocal.begin() as session:
            handled = await CheckoutService.handle_stripe_event(
                session,
                event=event,
                now_utc=now_utc,
            )
    except Exception:
        logger.exception(
            "stripe_webhook_failed",
            event_id=event.get("id"),
            event_type=event.get("type"),
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    logger.info(
        "stripe_webhook_processed",
        event_id=event.get("id"),
        event_type=event.get("type"),
        handled=handled,
    )
    return JSONResponse(status_code=200, content={"received": True})
