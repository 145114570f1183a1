from __future__ import annotations

from sqlalchemy import CheckConstraint, UniqueConstraint

from levefit.db.models import (  # noqa: F401
    Affiliate,
    AffiliateSale,
    CapsuleDay,
    CompletedDetox,
    CompletedExercise,
    CompletedRecipe,
    MilestonePushLog,
    NotificationSettings,
    Order,
    PixWithdrawal,
    PointsHistory,
    Profile,
    PushSubscription,
    RedeemedReward,
    Referral,
    Reservation,
    Reward,
    UserPoints,
    UserRole,
    Wallet,
    WalletTransaction,
    WaterIntakeDay,
)
from levefit.db.models.base import Base


def _check_names(table_name: str) -> set[str]:
    return {
        constraint.name
        for constraint in Base.metadata.tables[table_name].constraints
        if isinstance(constraint, CheckConstraint)
    }


def test_all_tables_registered() -> None:
    expected_tables = {
        "profiles",
        "user_roles",
        "wallets",
        "wallet_transactions",
        "referrals",
        "affiliates",
        "affiliate_sales",
        "pix_withdrawals",
        "orders",
        "reservations",
        "push_subscriptions",
        "notification_settings",
        "capsule_days",
        "water_intake_history",
        "completed_exercises",
        "completed_recipes",
        "completed_detox",
        "milestone_push_logs",
        "user_points",
        "points_history",
        "rewards",
        "redeemed_rewards",
    }
    assert expected_tables.issubset(set(Base.metadata.tables.keys()))


def test_wallet_constraints_exist() -> None:
    assert "ck_wallets_balance_non_negative" in _check_names("wallets")

    ledger_checks = _check_names("wallet_transactions")
    assert "ck_wallet_transactions_type" in ledger_checks
    assert "ck_wallet_transactions_amount_sign" in ledger_checks
    assert "ck_wallet_transactions_amount_non_zero" in ledger_checks

    ledger = Base.metadata.tables["wallet_transactions"]
    assert ledger.c.idempotency_key.unique is True

    referrals = Base.metadata.tables["referrals"]
    assert "ck_referrals_status" in _check_names("referrals")
    assert referrals.c.kiwify_order_id.unique is True


def test_affiliate_constraints_exist() -> None:
    assert "ck_affiliate_sales_status" in _check_names("affiliate_sales")
    assert "ck_pix_withdrawals_status" in _check_names("pix_withdrawals")
    assert "ck_pix_withdrawals_amount_positive" in _check_names("pix_withdrawals")

    withdrawals = Base.metadata.tables["pix_withdrawals"]
    withdrawal_indexes = {index.name: index for index in withdrawals.indexes}
    assert "uq_pix_withdrawals_single_pending" in withdrawal_indexes
    assert withdrawal_indexes["uq_pix_withdrawals_single_pending"].unique is True


def test_habit_tables_are_unique_per_user_and_day() -> None:
    for table_name, constraint_name in (
        ("capsule_days", "uq_capsule_days_user_date"),
        ("water_intake_history", "uq_water_intake_history_user_date"),
        ("completed_exercises", "uq_completed_exercises_user_item"),
        ("completed_recipes", "uq_completed_recipes_user_item"),
        ("completed_detox", "uq_completed_detox_user_item"),
    ):
        table = Base.metadata.tables[table_name]
        unique_names = {
            constraint.name for constraint in table.constraints if isinstance(constraint, UniqueConstraint)
        }
        assert constraint_name in unique_names


def test_profile_and_role_checks_exist() -> None:
    profile_checks = _check_names("profiles")
    assert "ck_profiles_kit_type" in profile_checks
    assert "ck_profiles_imc_category" in profile_checks
    assert "ck_profiles_state_version_positive" in profile_checks
    assert "ck_user_roles_role" in _check_names("user_roles")
