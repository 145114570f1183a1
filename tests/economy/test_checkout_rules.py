from __future__ import annotations

from decimal import Decimal

import pytest

from levefit.economy.checkout.cart import Cart, CartItem
from levefit.economy.checkout.errors import (
    EmptyCartError,
    InvalidCartItemError,
    InvalidWalletDiscountError,
)
from levefit.economy.checkout.line_items import (
    build_line_items,
    build_shipping_options,
    kit_type_for_total,
)


def _item(variant_id: str, *, price: str = "100.00", quantity: int = 1) -> CartItem:
    return CartItem(variant_id=variant_id, title=f"LeveFit {variant_id}", price=Decimal(price), quantity=quantity)


def test_cart_merges_same_variant() -> None:
    cart = Cart()
    cart.add_item(_item("v1"))
    cart.add_item(_item("v1", quantity=2))
    cart.add_item(_item("v2", price="50.00"))

    assert len(cart.items) == 2
    assert cart.total_quantity == 4
    assert cart.subtotal == Decimal("350.00")


def test_cart_update_to_zero_removes_line() -> None:
    cart = Cart()
    cart.add_item(_item("v1"))
    cart.update_quantity("v1", 0)

    assert cart.is_empty()


def test_cart_rejects_invalid_quantity() -> None:
    with pytest.raises(InvalidCartItemError):
        Cart().add_item(_item("v1", quantity=0))


def test_line_items_spread_wallet_discount() -> None:
    cart = Cart()
    cart.add_item(_item("v1", price="100.00"))
    cart.add_item(_item("v2", price="50.00", quantity=2))

    line_items = build_line_items(cart, wallet_discount=Decimal("50.00"))

    assert [item["price_data"]["unit_amount"] for item in line_items] == [7500, 3750]
    assert [item["quantity"] for item in line_items] == [1, 2]
    assert line_items[0]["price_data"]["currency"] == "brl"


def test_line_items_without_discount_use_full_price() -> None:
    cart = Cart()
    cart.add_item(_item("v1", price="149.90"))

    line_items = build_line_items(cart, wallet_discount=Decimal("0"))

    assert line_items[0]["price_data"]["unit_amount"] == 14990


def test_line_items_reject_empty_cart_and_bad_discount() -> None:
    with pytest.raises(EmptyCartError):
        build_line_items(Cart(), wallet_discount=Decimal("0"))

    cart = Cart()
    cart.add_item(_item("v1"))
    with pytest.raises(InvalidWalletDiscountError):
        build_line_items(cart, wallet_discount=Decimal("100.01"))
    with pytest.raises(InvalidWalletDiscountError):
        build_line_items(cart, wallet_discount=Decimal("-1"))


def test_shipping_is_free_from_three_units() -> None:
    free = build_shipping_options(3)[0]["shipping_rate_data"]
    paid = build_shipping_options(2)[0]["shipping_rate_data"]

    assert free["fixed_amount"]["amount"] == 0
    assert paid["fixed_amount"]["amount"] == 1500


def test_kit_type_for_total() -> None:
    assert kit_type_for_total(Decimal("500")) == "kit5"
    assert kit_type_for_total(Decimal("300")) == "kit3"
    assert kit_type_for_total(Decimal("299.99")) == "kit1"
