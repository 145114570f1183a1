from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

import structlog
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from levefit.api.routes.request_auth import require_user
from levefit.core.config import get_settings
from levefit.db.session import SessionLocal
from levefit.economy.checkout.cart import Cart, CartItem
from levefit.economy.checkout.errors import CheckoutError, PixCodeNotFoundError
from levefit.economy.checkout.pix import get_pix_code
from levefit.economy.checkout.reservations import ReservationService, build_reservation_email
from levefit.economy.checkout.service import CheckoutService
from levefit.services.email_delivery import send_admin_email
from levefit.services.stripe_client import StripeError, get_stripe_client

router = APIRouter(tags=["checkout"])
logger = structlog.get_logger(__name__)


class CheckoutItemRequest(BaseModel):
    variant_id: str | None = Field(default=None, max_length=200)
    title: str = Field(min_length=1, max_length=200)
    price: Decimal
    quantity: int
    image: str | None = None


class CreateCheckoutRequest(BaseModel):
    items: list[CheckoutItemRequest] = Field(default_factory=list)
    affiliate_code: str | None = Field(default=None, max_length=32)
    wallet_discount: Decimal | None = None


class PixCodeResponse(BaseModel):
    kit: str
    pix_code: str


class CreateReservationRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    phone: str = Field(min_length=1, max_length=32)
    email: str = Field(min_length=3, max_length=320)
    product_title: str = Field(min_length=1, max_length=200)
    amount: Decimal | None = None


def build_cart(items: list[CheckoutItemRequest]) -> Cart:
    cart = Cart()
    for item in items:
        cart.add_item(
            CartItem(
                variant_id=item.variant_id or item.title,
                title=item.title,
                price=item.price,
                quantity=item.quantity,
                image=item.image,
            )
        )
    return cart


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/create-checkout")
async def create_checkout(payload: CreateCheckoutRequest, request: Request) -> JSONResponse:
    user = require_user(request)
    if not user.email:
        return _error(400, "User email is required")
    if not payload.items:
        return _error(400, "No items provided")
    if not get_settings().stripe_secret_key:
        logger.error("checkout_stripe_not_configured")
        return _error(500, "Stripe not configured")

    wallet_discount = payload.wallet_discount or Decimal("0")
    try:
        cart = build_cart(payload.items)
        async with SessionLocal.begin() as session:
            await CheckoutService.ensure_wallet_covers_discount(
                session,
                user_id=user.user_id,
                wallet_discount=wallet_discount,
            )
        checkout_session = await CheckoutService.create_checkout_session(
            stripe=get_stripe_client(),
            cart=cart,
            user_id=user.user_id,
            email=user.email,
            origin=request.headers.get("origin") or get_settings().public_app_url,
            affiliate_code=payload.affiliate_code,
            wallet_discount=wallet_discount,
        )
    except CheckoutError as exc:
        logger.info("checkout_rejected", user_id=str(user.user_id), reason=type(exc).__name__)
        return _error(400, str(exc) or "Invalid cart")
    except StripeError as exc:
        logger.warning("checkout_stripe_failed", user_id=str(user.user_id), error=str(exc))
        return _error(500, str(exc))

    async with SessionLocal.begin() as session:
        await CheckoutService.record_pending_order(
            session,
            user_id=user.user_id,
            stripe_session_id=str(checkout_session["id"]),
            email=user.email,
            items=[item.model_dump(mode="json") for item in payload.items],
            now_utc=datetime.now(timezone.utc),
        )

    logger.info(
        "checkout_session_created",
        user_id=str(user.user_id),
        stripe_session_id=str(checkout_session["id"]),
        items_total=str(cart.subtotal),
    )
    return JSONResponse(status_code=200, content={"url": checkout_session.get("url")})


@router.get("/pix/{kit}", response_model=PixCodeResponse)
async def get_pix(kit: str) -> PixCodeResponse:
    try:
        pix_code = get_pix_code(get_settings(), kit)
    except PixCodeNotFoundError as exc:
        raise HTTPException(status_code=404, detail={"code": "E_PIX_KIT_NOT_FOUND"}) from exc
    return PixCodeResponse(kit=kit, pix_code=pix_code)


def _optional_user_id(request: Request) -> UUID | None:
    if not request.headers.get("Authorization"):
        return None
    return require_user(request).user_id


@router.post("/create-reservation")
async def create_reservation(payload: CreateReservationRequest, request: Request) -> JSONResponse:
    user_id = _optional_user_id(request)
    now_utc = datetime.now(timezone.utc)
    async with SessionLocal.begin() as session:
        reservation = await ReservationService.create(
            session,
            name=payload.name.strip(),
            phone=payload.phone.strip(),
            email=payload.email.strip(),
            product_title=payload.product_title.strip(),
            amount=payload.amount,
            user_id=user_id,
            now_utc=now_utc,
        )
    logger.info("reservation_created", reservation_id=str(reservation.id), email=reservation.email)

    subject, html = build_reservation_email(reservation, now_utc=now_utc)
    await send_admin_email(subject=subject, html=html, event="reservation_created")
    return JSONResponse(status_code=200, content={"success": True})
