from __future__ import annotations

from decimal import Decimal

REFERRAL_CREDIT_AMOUNT = Decimal("25.00")
EXPIRATION_DAYS = 90
EXPIRATION_BATCH_SIZE = 500
REFERRAL_CODE_GENERATION_ATTEMPTS = 10
CENTS = Decimal("0.01")

TRANSACTION_TYPE_CREDIT = "credit"
TRANSACTION_TYPE_PURCHASE = "purchase"
TRANSACTION_TYPE_EXPIRATION = "expiration"

REFERRAL_STATUS_PENDING = "pending"
REFERRAL_STATUS_APPROVED = "approved"
REFERRAL_STATUS_CONVERTED = "converted"
AWAITING_APPROVAL_STATUSES = (REFERRAL_STATUS_PENDING, REFERRAL_STATUS_CONVERTED)

DEFAULT_PURCHASE_TITLE = "Loja LeveFit"
CREDIT_DESCRIPTION_TEMPLATE = "Indicação aprovada - {email}"
APPROVAL_CREDIT_DESCRIPTION = "Crédito de indicação aprovada"
PURCHASE_DESCRIPTION_TEMPLATE = "Compra: {title}"
EXPIRATION_DESCRIPTION = f"Créditos expirados após {EXPIRATION_DAYS} dias de inatividade"
