from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from levefit.economy.checkout.errors import InvalidCartItemError


@dataclass(slots=True)
class CartItem:
    variant_id: str
    title: str
    price: Decimal
    quantity: int
    image: str | None = None

    def line_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass(slots=True)
class Cart:
    items: list[CartItem] = field(default_factory=list)

    def add_item(self, item: CartItem) -> None:
        """Adds an item, merging quantities with an existing line of the same variant."""
        _validate_item(item)
        for existing in self.items:
            if existing.variant_id == item.variant_id:
                existing.quantity += item.quantity
                return
        self.items.append(item)

    def update_quantity(self, variant_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(variant_id)
            return
        for existing in self.items:
            if existing.variant_id == variant_id:
                existing.quantity = quantity
                return

    def remove_item(self, variant_id: str) -> None:
        self.items = [item for item in self.items if item.variant_id != variant_id]

    def clear(self) -> None:
        self.items = []

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total() for item in self.items), Decimal("0"))

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    def is_empty(self) -> bool:
        return not self.items


def _validate_item(item: CartItem) -> None:
    if not item.title.strip():
        raise InvalidCartItemError("title is required")
    if item.price <= 0:
        raise InvalidCartItemError("price must be positive")
    if item.quantity < 1:
        raise InvalidCartItemError("quantity must be at least 1")
