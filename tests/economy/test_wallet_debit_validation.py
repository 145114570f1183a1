from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest

from levefit.economy.wallet.errors import InvalidAmountError
from levefit.economy.wallet.service import WalletService


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5.00"), Decimal("0.001"), Decimal("0.004")])
def test_debit_rejects_amounts_that_round_to_zero_or_less(amount: Decimal) -> None:
    with pytest.raises(InvalidAmountError):
        asyncio.run(
            WalletService.debit_wallet(
                SimpleNamespace(),
                user_id=uuid4(),
                amount=amount,
                description="Compra: Loja LeveFit",
                idempotency_key="wallet_test",
                now_utc=datetime(2026, 3, 1, tzinfo=timezone.utc),
            )
        )
