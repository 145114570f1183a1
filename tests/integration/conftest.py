from __future__ import annotations

import pytest
from sqlalchemy import text

from levefit.core.config import get_settings
from levefit.core.integration_db_safety import assert_safe_integration_db, parse_host_list
from levefit.db.session import engine

TRUNCATE_TABLES = (
    "redeemed_rewards",
    "rewards",
    "points_history",
    "user_points",
    "milestone_push_logs",
    "completed_detox",
    "completed_recipes",
    "completed_exercises",
    "water_intake_history",
    "capsule_days",
    "notification_settings",
    "push_subscriptions",
    "reservations",
    "orders",
    "pix_withdrawals",
    "affiliate_sales",
    "affiliates",
    "wallet_transactions",
    "referrals",
    "wallets",
    "user_roles",
    "profiles",
)

TRUNCATE_SQL = f"TRUNCATE TABLE {', '.join(TRUNCATE_TABLES)} RESTART IDENTITY CASCADE"


@pytest.fixture(scope="session", autouse=True)
def guard_integration_db_target() -> None:
    assert_safe_integration_db(
        str(engine.url),
        extra_hosts=parse_host_list(get_settings().integration_db_extra_hosts),
    )


@pytest.fixture(autouse=True)
async def cleanup_db() -> None:
    # Dispose pooled connections between tests to avoid cross-event-loop asyncpg reuse.
    await engine.dispose()

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as exc:  # pragma: no cover - environment-dependent
        pytest.skip(f"Postgres is required for integration tests: {exc}")

    async with engine.begin() as conn:
        await conn.execute(text(TRUNCATE_SQL))

    yield

    await engine.dispose()
