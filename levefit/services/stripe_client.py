from __future__ import annotations

import json
from typing import Any

import stripe
import structlog

from levefit.core.config import get_settings

logger = structlog.get_logger(__name__)
SIGNATURE_TOLERANCE_SECONDS = 300

StripeError = stripe.StripeError
StripeSignatureError = stripe.SignatureVerificationError


class StripeGateway:
    """The two Checkout calls the store needs, on top of the async Stripe SDK client."""

    def __init__(self, client: stripe.StripeClient) -> None:
        self._client = client

    async def find_customer_id_by_email(self, email: str) -> str | None:
        customers = await self._client.customers.list_async(params={"email": email, "limit": 1})
        if not customers.data:
            return None
        return str(customers.data[0].id)

    async def create_checkout_session(self, params: dict[str, Any]) -> dict[str, Any]:
        checkout_session = await self._client.checkout.sessions.create_async(params=params)
        return {"id": checkout_session.id, "url": checkout_session.url}


def get_stripe_client() -> StripeGateway:
    settings = get_settings()
    return StripeGateway(
        stripe.StripeClient(
            settings.stripe_secret_key,
            base_addresses={"api": settings.stripe_api_base_url},
            http_client=stripe.HTTPXClient(timeout=settings.stripe_timeout_seconds),
        )
    )


def construct_webhook_event(
    *,
    payload: bytes,
    signature_header: str | None,
    secret: str,
    tolerance_seconds: int = SIGNATURE_TOLERANCE_SECONDS,
) -> dict[str, Any]:
    """Verifies the Stripe-Signature header and returns the event as plain JSON."""
    if not signature_header:
        raise StripeSignatureError("No Stripe-Signature header", signature_header, payload)

    stripe.WebhookSignature.verify_header(
        payload.decode("utf-8"),
        signature_header,
        secret,
        tolerance_seconds,
    )
    event = json.loads(payload)
    if not isinstance(event, dict):
        raise ValueError("Stripe event payload is not an object")
    return event
