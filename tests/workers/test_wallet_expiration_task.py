import asyncio
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from levefit.workers.celery_app import celery_app
from levefit.workers.tasks import wallet_expiration, wallet_expiration_async


def test_run_wallet_expiration_task_wrapper(monkeypatch) -> None:
    async def fake_async() -> dict[str, object]:
        return {"expired_count": 3, "total_expired_amount": 120.0, "expiration_days": 90}

    monkeypatch.setattr(wallet_expiration, "run_wallet_expiration_async", fake_async)

    result = wallet_expiration.run_wallet_expiration()
    assert result["expired_count"] == 3
    assert result["expiration_days"] == 90


def test_wallet_expiration_is_scheduled_daily() -> None:
    entry = celery_app.conf.beat_schedule["expire-wallet-credits-daily"]

    assert entry["task"] == "levefit.workers.tasks.wallet_expiration.run_wallet_expiration"
    assert entry["options"] == {"queue": "q_low"}



def _patch_wallet_scan(monkeypatch, fake_session_local, fake_candidates, fake_expire_wallet) -> None:
    monkeypatch.setattr(wallet_expiration_async, "SessionLocal", fake_session_local)
    monkeypatch.setattr(
        wallet_expiration_async.WalletsRepo,
        "list_expiration_candidate_ids",
        staticmethod(fake_candidates),
    )
    monkeypatch.setattr(
        wallet_expiration_async.WalletService,
        "expire_wallet",
        staticmethod(fake_expire_wallet),
    )


def test_expire_wallet_credits_walks_batches(monkeypatch, fake_session_local) -> None:
    first_batch = [uuid4(), uuid4()]
    second_batch = [uuid4()]
    batches = [first_batch, second_batch, []]
    cursors: list[object] = []
    amounts = {
        first_batch[0]: Decimal("50.00"),
        first_batch[1]: Decimal("25.00"),
        second_batch[0]: None,
    }

    async def fake_candidates(session, *, updated_before_utc, after_wallet_id, limit):  # noqa: ARG001
        assert limit == 2
        cursors.append(after_wallet_id)
        return batches.pop(0)

    async def fake_expire_wallet(session, *, wallet_id, now_utc):  # noqa: ARG001
        return amounts[wallet_id]

    _patch_wallet_scan(monkeypatch, fake_session_local, fake_candidates, fake_expire_wallet)

    outcome = asyncio.run(
        wallet_expiration_async.expire_wallet_credits(
            now_utc=datetime(2026, 3, 1, 6, 15, tzinfo=timezone.utc),
            batch_size=2,
        )
    )

    assert outcome.expired_count == 2
    assert outcome.total_expired_amount == Decimal("75.00")
    assert outcome.expiration_days == 90
    assert cursors == [None, first_batch[1], second_batch[0]]


def test_expire_wallet_credits_reaches_wallets_behind_skipped_ones(monkeypatch, fake_session_local) -> None:
    recent_a, recent_b, inactive = sorted([uuid4(), uuid4(), uuid4()])
    candidates = [recent_a, recent_b, inactive]
    expired: list[object] = []

    async def fake_candidates(session, *, updated_before_utc, after_wallet_id, limit):  # noqa: ARG001
        remaining = [wallet_id for wallet_id in candidates if after_wallet_id is None or wallet_id > after_wallet_id]
        return remaining[:limit]

    async def fake_expire_wallet(session, *, wallet_id, now_utc):  # noqa: ARG001
        if wallet_id != inactive:
            return None
        expired.append(wallet_id)
        return Decimal("25.00")

    _patch_wallet_scan(monkeypatch, fake_session_local, fake_candidates, fake_expire_wallet)

    outcome = asyncio.run(
        wallet_expiration_async.expire_wallet_credits(
            now_utc=datetime(2026, 3, 1, 6, 15, tzinfo=timezone.utc),
            batch_size=2,
        )
    )

    assert outcome.expired_count == 1
    assert outcome.total_expired_amount == Decimal("25.00")
    assert expired == [inactive]
