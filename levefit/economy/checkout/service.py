from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.orders import Order
from levefit.db.repo.orders_repo import OrdersRepo
from levefit.db.repo.wallets_repo import WalletsRepo
from levefit.economy.affiliates.service import AffiliateService
from levefit.economy.checkout.cart import Cart
from levefit.economy.checkout.constants import (
    ALLOWED_SHIPPING_COUNTRIES,
    CURRENCY,
    ORDER_STATUS_PAID,
    ORDER_STATUS_PAYMENT_FAILED,
    ORDER_STATUS_PENDING,
    ORDER_STATUS_PENDING_PAYMENT,
    ORDER_STATUS_REFUNDED,
    PAYMENT_METHOD_TYPES,
)
from levefit.economy.checkout.errors import WalletDiscountUnavailableError
from levefit.economy.checkout.line_items import (
    build_line_items,
    build_shipping_options,
    kit_type_for_total,
)
from levefit.economy.wallet.errors import WalletError
from levefit.economy.wallet.service import WalletService
from levefit.services.stripe_client import StripeGateway

logger = structlog.get_logger(__name__)

WALLET_DISCOUNT_DESCRIPTION = "Desconto de créditos na compra"


def build_checkout_session_params(
    *,
    cart: Cart,
    user_id: UUID,
    email: str,
    customer_id: str | None,
    origin: str,
    affiliate_code: str | None,
    wallet_discount: Decimal,
) -> dict[str, Any]:
    metadata: dict[str, str] = {"kit_type": kit_type_for_total(cart.subtotal)}
    if affiliate_code:
        metadata["affiliate_code"] = affiliate_code
    if wallet_discount > 0:
        metadata["wallet_discount"] = str(wallet_discount)
        metadata["wallet_user_id"] = str(user_id)

    params: dict[str, Any] = {
        "line_items": build_line_items(cart, wallet_discount=wallet_discount),
        "mode": "payment",
        "payment_method_types": list(PAYMENT_METHOD_TYPES),
        "shipping_address_collection": {"allowed_countries": list(ALLOWED_SHIPPING_COUNTRIES)},
        "shipping_options": build_shipping_options(cart.total_quantity),
        "success_url": f"{origin}/checkout-success?session_id={{CHECKOUT_SESSION_ID}}",
        "cancel_url": f"{origin}/store",
        "metadata": metadata,
    }
    if customer_id:
        params["customer"] = customer_id
    else:
        params["customer_email"] = email
    return params


def _decimal_or_zero(raw: object) -> Decimal:
    try:
        return Decimal(str(raw)) if raw not in (None, "") else Decimal("0")
    except InvalidOperation:
        return Decimal("0")


class CheckoutService:
    @staticmethod
    async def ensure_wallet_covers_discount(
        session: AsyncSession,
        *,
        user_id: UUID,
        wallet_discount: Decimal,
    ) -> None:
        """Rejects a discount larger than the caller's current wallet balance."""
        if wallet_discount <= 0:
            return
        wallet = await WalletsRepo.get_by_user_id(session, user_id)
        if wallet is None or wallet_discount > wallet.balance:
            raise WalletDiscountUnavailableError("Insufficient wallet balance")

    @staticmethod
    async def create_checkout_session(
        *,
        stripe: StripeGateway,
        cart: Cart,
        user_id: UUID,
        email: str,
        origin: str,
        affiliate_code: str | None,
        wallet_discount: Decimal,
    ) -> dict[str, Any]:
        customer_id = await stripe.find_customer_id_by_email(email)
        params = build_checkout_session_params(
            cart=cart,
            user_id=user_id,
            email=email,
            customer_id=customer_id,
            origin=origin,
            affiliate_code=affiliate_code,
            wallet_discount=wallet_discount,
        )
        return await stripe.create_checkout_session(params)

    @staticmethod
    async def record_pending_order(
        session: AsyncSession,
        *,
        user_id: UUID,
        stripe_session_id: str,
        email: str,
        items: list[dict[str, Any]],
        now_utc: datetime,
    ) -> Order:
        return await OrdersRepo.create(
            session,
            order=Order(
                user_id=user_id,
                stripe_session_id=stripe_session_id,
                status=ORDER_STATUS_PENDING,
                amount_total=0,
                currency=CURRENCY,
                customer_email=email,
                items=items,
                created_at=now_utc,
                updated_at=now_utc,
            ),
        )

    @staticmethod
    async def _apply_paid_side_effects(
        session: AsyncSession,
        *,
        checkout_session: dict[str, Any],
        now_utc: datetime,
    ) -> None:
        session_id = str(checkout_session["id"])
        metadata = checkout_session.get("metadata") or {}
        amount_total = int(checkout_session.get("amount_total") or 0)
        customer_details = checkout_session.get("customer_details") or {}
        customer_email = customer_details.get("email") or checkout_session.get("customer_email")

        affiliate_code = metadata.get("affiliate_code")
        if affiliate_code and amount_total > 0:
            await AffiliateService.record_sale(
                session,
                affiliate_code=affiliate_code,
                order_id=session_id,
                sale_amount=Decimal(amount_total) / 100,
                customer_email=customer_email,
                now_utc=now_utc,
            )

        wallet_discount = _decimal_or_zero(metadata.get("wallet_discount"))
        wallet_user_id = metadata.get("wallet_user_id")
        if wallet_discount > 0 and wallet_user_id:
            try:
                await WalletService.debit_wallet(
                    session,
                    user_id=UUID(wallet_user_id),
                    amount=wallet_discount,
                    description=WALLET_DISCOUNT_DESCRIPTION,
                    idempotency_key=f"stripe:{session_id}",
                    now_utc=now_utc,
                )
            except (WalletError, ValueError):
                logger.warning(
                    "stripe_wallet_discount_not_applied",
                    stripe_session_id=session_id,
                    wallet_user_id=wallet_user_id,
                    exc_info=True,
                )

    @staticmethod
    async def _set_status_by_session(
        session: AsyncSession,
        *,
        stripe_session_id: str,
        status: str,
        now_utc: datetime,
        payment_intent_id: str | None = None,
        amount_total: int | None = None,
    ) -> Order | None:
        order = await OrdersRepo.get_by_session_id_for_update(session, stripe_session_id)
        if order is None:
            logger.warning("stripe_order_not_found", stripe_session_id=stripe_session_id)
            return None
        order.status = status
        if payment_intent_id is not None:
            order.stripe_payment_intent_id = payment_intent_id
        if amount_total is not None:
            order.amount_total = amount_total
        order.updated_at = now_utc
        await session.flush()
        return order

    @staticmethod
    async def handle_stripe_event(
        session: AsyncSession,
        *,
        event: dict[str, Any],
        now_utc: datetime,
    ) -> bool:
        """Applies one verified Stripe event; returns False for ignored event types."""
        event_type = str(event.get("type") or "")
        data_object = (event.get("data") or {}).get("object") or {}

        if event_type == "checkout.session.completed":
            paid = data_object.get("payment_status") == "paid"
            payment_intent = data_object.get("payment_intent")
            await CheckoutService._set_status_by_session(
                session,
                stripe_session_id=str(data_object["id"]),
                status=ORDER_STATUS_PAID if paid else ORDER_STATUS_PENDING_PAYMENT,
                payment_intent_id=str(payment_intent) if payment_intent else None,
                amount_total=int(data_object.get("amount_total") or 0),
                now_utc=now_utc,
            )
            if paid:
                await CheckoutService._apply_paid_side_effects(
                    session,
                    checkout_session=data_object,
                    now_utc=now_utc,
                )
            return True

        if event_type == "checkout.session.async_payment_succeeded":
            await CheckoutService._set_status_by_session(
                session,
                stripe_session_id=str(data_object["id"]),
                status=ORDER_STATUS_PAID,
                now_utc=now_utc,
            )
            await CheckoutService._apply_paid_side_effects(
                session,
                checkout_session=data_object,
                now_utc=now_utc,
            )
            return True

        if event_type == "checkout.session.async_payment_failed":
            await CheckoutService._set_status_by_session(
                session,
                stripe_session_id=str(data_object["id"]),
                status=ORDER_STATUS_PAYMENT_FAILED,
                now_utc=now_utc,
            )
            return True

        if event_type == "charge.refunded":
            payment_intent = data_object.get("payment_intent")
            if not payment_intent:
                return True
            orders = await OrdersRepo.list_by_payment_intent_for_update(session, str(payment_intent))
            for order in orders:
                order.status = ORDER_STATUS_REFUNDED
                order.updated_at = now_utc
            await session.flush()
            return True

        logger.info("stripe_webhook_event_ignored", event_type=event_type)
        return False
