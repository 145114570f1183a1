from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID

import structlog

from levefit.db.repo.wallets_repo import WalletsRepo
from levefit.db.session import SessionLocal
from levefit.economy.wallet.constants import EXPIRATION_BATCH_SIZE, EXPIRATION_DAYS
from levefit.economy.wallet.service import WalletService
from levefit.economy.wallet.types import WalletExpirationResult

logger = structlog.get_logger("levefit.workers.tasks.wallet_expiration")


async def expire_wallet_credits(
    *,
    now_utc: datetime,
    batch_size: int = EXPIRATION_BATCH_SIZE,
) -> WalletExpirationResult:
    cutoff_utc = now_utc - timedelta(days=EXPIRATION_DAYS)
    resolved_batch_size = max(1, int(batch_size))

    expired_count = 0
    total_expired = Decimal("0.00")
    last_wallet_id: UUID | None = None
    while True:
        async with SessionLocal.begin() as session:
            wallet_ids = await WalletsRepo.list_expiration_candidate_ids(
                session,
                updated_before_utc=cutoff_utc,
                after_wallet_id=last_wallet_id,
                limit=resolved_batch_size,
            )
        if not wallet_ids:
            break

        for wallet_id in wallet_ids:
            last_wallet_id = wallet_id
            async with SessionLocal.begin() as session:
                expired_amount = await WalletService.expire_wallet(
                    session,
                    wallet_id=wallet_id,
                    now_utc=now_utc,
                )
            if expired_amount is None:
                continue
            expired_count += 1
            total_expired += expired_amount
            logger.info(
                "wallet_credits_expired",
                wallet_id=str(wallet_id),
                expired_amount=str(expired_amount),
            )

    return WalletExpirationResult(
        expired_count=expired_count,
        total_expired_amount=total_expired,
        expiration_days=EXPIRATION_DAYS,
    )


async def run_wallet_expiration_async() -> dict[str, object]:
    now_utc = datetime.now(timezone.utc)
    outcome = await expire_wallet_credits(now_utc=now_utc)
    result: dict[str, object] = {
        "expired_count": outcome.expired_count,
        "total_expired_amount": float(outcome.total_expired_amount),
        "expiration_days": outcome.expiration_days,
    }
    logger.info("wallet_expiration_finished", **result)
    return result
