from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from levefit.db.models.referrals import Referral
from levefit.db.models.wallet_transactions import WalletTransaction
from levefit.db.session import SessionLocal
from levefit.economy.wallet.errors import ReferralCodeNotFoundError
from levefit.economy.wallet.service import WalletService

UTC = timezone.utc


async def _create_wallet(now_utc: datetime) -> tuple[object, str]:
    user_id = uuid4()
    async with SessionLocal.begin() as session:
        wallet = await WalletService.get_or_create_wallet(session, user_id=user_id, now_utc=now_utc)
        return user_id, wallet.referral_code


@pytest.mark.asyncio
async def test_referral_credit_is_idempotent_per_order() -> None:
    now_utc = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
    user_id, referral_code = await _create_wallet(now_utc)

    async with SessionLocal.begin() as session:
        first = await WalletService.credit_referral(
            session,
            referral_code=referral_code.lower(),
            kiwify_order_id="kiwify-order-1",
            customer_email="friend@example.com",
            now_utc=now_utc,
        )
    async with SessionLocal.begin() as session:
        replay = await WalletService.credit_referral(
            session,
            referral_code=referral_code,
            kiwify_order_id="kiwify-order-1",
            customer_email="friend@example.com",
            now_utc=now_utc,
        )

    assert first.duplicate is False
    assert first.new_balance == Decimal("25.00")
    assert replay.duplicate is True

    async with SessionLocal.begin() as session:
        overview = await WalletService.get_overview(session, user_id=user_id, now_utc=now_utc)
        referrals_total = await session.scalar(select(func.count()).select_from(Referral))
        credits_total = await session.scalar(select(func.count()).select_from(WalletTransaction))

    assert overview.balance == Decimal("25.00")
    assert referrals_total == 1
    assert credits_total == 1
    assert [item.type for item in overview.transactions] == ["credit"]


@pytest.mark.asyncio
async def test_referral_credit_rejects_unknown_code() -> None:
    with pytest.raises(ReferralCodeNotFoundError):
        async with SessionLocal.begin() as session:
            await WalletService.credit_referral(
                session,
                referral_code="LFNOPE99",
                kiwify_order_id="kiwify-order-2",
                customer_email=None,
                now_utc=datetime(2026, 3, 1, 12, 0, tzinfo=UTC),
            )
