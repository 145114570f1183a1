from __future__ import annotations

from decimal import Decimal

CURRENCY = "brl"
ALLOWED_SHIPPING_COUNTRIES = ("BR",)
PAYMENT_METHOD_TYPES = ("card", "boleto")

FREE_SHIPPING_MIN_QUANTITY = 3
STANDARD_SHIPPING_CENTS = 1500
DELIVERY_MIN_BUSINESS_DAYS = 5
DELIVERY_MAX_BUSINESS_DAYS = 10
FREE_SHIPPING_LABEL = "Frete Grátis"
STANDARD_SHIPPING_LABEL = "Envio Padrão"

KIT5_MIN_TOTAL = Decimal("500")
KIT3_MIN_TOTAL = Decimal("300")

DEFAULT_RESERVATION_AMOUNT = Decimal("150.00")

ORDER_STATUS_PENDING = "pending"
ORDER_STATUS_PAID = "paid"
ORDER_STATUS_PENDING_PAYMENT = "pending_payment"
ORDER_STATUS_PAYMENT_FAILED = "payment_failed"
ORDER_STATUS_REFUNDED = "refunded"
