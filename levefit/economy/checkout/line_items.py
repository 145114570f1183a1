from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from levefit.economy.checkout.cart import Cart
from levefit.economy.checkout.constants import (
    CURRENCY,
    DELIVERY_MAX_BUSINESS_DAYS,
    DELIVERY_MIN_BUSINESS_DAYS,
    FREE_SHIPPING_LABEL,
    FREE_SHIPPING_MIN_QUANTITY,
    KIT3_MIN_TOTAL,
    KIT5_MIN_TOTAL,
    STANDARD_SHIPPING_CENTS,
    STANDARD_SHIPPING_LABEL,
)
from levefit.economy.checkout.errors import EmptyCartError, InvalidWalletDiscountError


def to_cents(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def discounted_unit_amount(price: Decimal, discount_ratio: Decimal) -> int:
    discounted = max(Decimal("0"), price - price * discount_ratio)
    return to_cents(discounted)


def build_line_items(cart: Cart, *, wallet_discount: Decimal) -> list[dict[str, Any]]:
    """Builds Stripe price_data line items with the wallet discount spread proportionally."""
    if cart.is_empty():
        raise EmptyCartError
    if wallet_discount < 0 or wallet_discount > cart.subtotal:
        raise InvalidWalletDiscountError

    discount_ratio = wallet_discount / cart.subtotal if wallet_discount > 0 else Decimal("0")
    line_items: list[dict[str, Any]] = []
    for item in cart.items:
        product_data: dict[str, Any] = {"name": item.title}
        if item.image:
            product_data["images"] = [item.image]
        line_items.append(
            {
                "price_data": {
                    "currency": CURRENCY,
                    "product_data": product_data,
                    "unit_amount": discounted_unit_amount(item.price, discount_ratio),
                },
                "quantity": item.quantity,
            }
        )
    return line_items


def build_shipping_options(total_quantity: int) -> list[dict[str, Any]]:
    free_shipping = total_quantity >= FREE_SHIPPING_MIN_QUANTITY
    return [
        {
            "shipping_rate_data": {
                "type": "fixed_amount",
                "fixed_amount": {
                    "amount": 0 if free_shipping else STANDARD_SHIPPING_CENTS,
                    "currency": CURRENCY,
                },
                "display_name": FREE_SHIPPING_LABEL if free_shipping else STANDARD_SHIPPING_LABEL,
                "delivery_estimate": {
                    "minimum": {"unit": "business_day", "value": DELIVERY_MIN_BUSINESS_DAYS},
                    "maximum": {"unit": "business_day", "value": DELIVERY_MAX_BUSINESS_DAYS},
                },
            }
        }
    ]


def kit_type_for_total(items_total: Decimal) -> str:
    if items_total >= KIT5_MIN_TOTAL:
        return "kit5"
    if items_total >= KIT3_MIN_TOTAL:
        return "kit3"
    return "kit1"
