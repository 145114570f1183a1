from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import select

from levefit.db.models.referrals import Referral
from levefit.db.models.wallet_transactions import WalletTransaction
from levefit.db.session import SessionLocal
from levefit.economy.habits.service import HabitsService
from levefit.economy.wallet.errors import DuplicateReferralOrderError, ReferralAlreadyApprovedError
from levefit.economy.wallet.service import WalletService

UTC = timezone.utc


@pytest.mark.asyncio
async def test_registered_conversion_is_credited_once_on_approval() -> None:
    now_utc = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
    referrer_id = uuid4()
    async with SessionLocal.begin() as session:
        wallet = await WalletService.get_or_create_wallet(session, user_id=referrer_id, now_utc=now_utc)
        referral_code = wallet.referral_code

    async with SessionLocal.begin() as session:
        referral = await WalletService.register_conversion(
            session,
            referral_code=referral_code.lower(),
            referred_email="bia@example.com",
            kiwify_order_id="manual-order-1",
            now_utc=now_utc,
        )
        referral_id = referral.id

    with pytest.raises(DuplicateReferralOrderError):
        async with SessionLocal.begin() as session:
            await WalletService.register_conversion(
                session,
                referral_code=referral_code,
                referred_email=None,
                kiwify_order_id="manual-order-1",
                now_utc=now_utc,
            )

    async with SessionLocal.begin() as session:
        overview = await WalletService.get_overview(session, user_id=referrer_id, now_utc=now_utc)
    assert overview.balance == Decimal("0.00")
    assert [item.id for item in overview.referrals_by_status["converted"]] == [referral_id]

    async with SessionLocal.begin() as session:
        result = await WalletService.approve_referral(session, referral_id=referral_id, now_utc=now_utc)

    assert result.credit_amount == Decimal("25.00")
    assert result.new_balance == Decimal("25.00")

    with pytest.raises(ReferralAlreadyApprovedError):
        async with SessionLocal.begin() as session:
            await WalletService.approve_referral(session, referral_id=referral_id, now_utc=now_utc)

    async with SessionLocal.begin() as session:
        stored = await session.scalar(select(Referral).where(Referral.id == referral_id))
        ledger = list((await session.scalars(select(WalletTransaction))).all())
        overview = await WalletService.get_overview(session, user_id=referrer_id, now_utc=now_utc)

    assert stored.status == "approved"
    assert stored.approved_at is not None
    assert [(row.amount, row.referral_id) for row in ledger] == [(Decimal("25.00"), referral_id)]
    assert overview.balance == Decimal("25.00")


@pytest.mark.asyncio
async def test_admin_approval_marks_profile_approved() -> None:
    now_utc = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
    user_id = uuid4()
    async with SessionLocal.begin() as session:
        created = await HabitsService.save_profile(
            session,
            user_id=user_id,
            expected_version=None,
            changes={"name": "Ana", "kit_type": "1_pote"},
            now_utc=now_utc,
            email="ana@example.com",
        )
    assert created.is_approved is False
    assert created.email == "ana@example.com"

    async with SessionLocal.begin() as session:
        approved = await HabitsService.approve_profile(session, user_id=user_id, now_utc=now_utc)
        version_after_first = approved.state_version
    async with SessionLocal.begin() as session:
        again = await HabitsService.approve_profile(session, user_id=user_id, now_utc=now_utc)

    assert approved.is_approved is True
    assert version_after_first == 2
    assert again.state_version == 2
