from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from levefit.core.config import get_settings
from levefit.core.referral_codes import normalize_referral_code
from levefit.db.session import SessionLocal
from levefit.economy.wallet.errors import ReferralCodeNotFoundError
from levefit.economy.wallet.service import WalletService
from levefit.services.kiwify_signature import is_valid_kiwify_signature

router = APIRouter(tags=["kiwify"])
logger = structlog.get_logger(__name__)
APPROVED_ORDER_STATUSES = {"paid", "approved"}


class KiwifyTrackingParameters(BaseModel):
    utm_source: str | None = None
    ref: str | None = None
    src: str | None = None


class KiwifyWebhookPayload(BaseModel):
    order_id: str
    order_status: str
    customer_email: str | None = None
    tracking_parameters: KiwifyTrackingParameters | None = None


def extract_referral_code(payload: KiwifyWebhookPayload) -> str | None:
    params = payload.tracking_parameters
    if params is None:
        return None
    for candidate in (params.utm_source, params.ref, params.src):
        code = normalize_referral_code(candidate)
        if code is not None:
            return code
    return None


def _reply(status_code: int, **content: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content)


@router.post("/kiwify-webhook")
async def kiwify_webhook(request: Request) -> JSONResponse:
    secret = get_settings().kiwify_webhook_secret
    if not secret:
        logger.error("kiwify_webhook_secret_not_configured")
        return _reply(500, success=False, error="Webhook not configured")

    signature = request.headers.get("x-kiwify-signature")
    if not signature:
        logger.warning("kiwify_webhook_missing_signature")
        return _reply(401, success=False, error="Missing signature")

    raw_body = await request.body()
    if not is_valid_kiwify_signature(payload=raw_body, secret=secret, received=signature):
        logger.warning("kiwify_webhook_invalid_signature")
        return _reply(401, success=False, error="Invalid signature")

    try:
        payload = KiwifyWebhookPayload.model_validate_json(raw_body)
    except ValidationError:
        logger.warning("kiwify_webhook_invalid_payload")
        return _reply(400, success=False, error="Invalid payload")

    if payload.order_status.lower() not in APPROVED_ORDER_STATUSES:
        return _reply(
            status.HTTP_200_OK,
            success=True,
            message="Order not approved, skipping",
        )

    referral_code = extract_referral_code(payload)
    if referral_code is None:
        return _reply(status.HTTP_200_OK, success=True, message="No referral code found")

    try:
        async with SessionLocal.begin() as session:
            result = await WalletService.credit_referral(
                session,
                referral_code=referral_code,
                kiwify_order_id=payload.order_id,
                customer_email=payload.customer_email,
                now_utc=datetime.now(timezone.utc),
            )
    except ReferralCodeNotFoundError:
        logger.info("kiwify_webhook_unknown_referral_code", referral_code=referral_code)
        return _reply(404, success=False, error="Referral code not found")
    except Exception:
        logger.exception("kiwify_webhook_failed", order_id=payload.order_id)
        return _reply(500, success=False, error="Internal server error")

    if result.duplicate:
        return _reply(status.HTTP_200_OK, success=True, message="Order already processed")

    return _reply(
        status.HTTP_200_OK,
        success=True,
        message="Referral processed successfully",
        credit_amount=float(result.credit_amount),
        new_balance=float(result.new_balance) if result.new_balance is not None else None,
    )
