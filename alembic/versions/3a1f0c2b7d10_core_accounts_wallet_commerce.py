"""core_accounts_wallet_commerce

Revision ID: 3a1f0c2b7d10
Revises:
Create Date: 2026-10-05 09:00:00.000000
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "3a1f0c2b7d10"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        primary_key=True,
        server_default=sa.text("gen_random_uuid()"),
    )


def upgrade() -> None:
    op.create_table(
        "profiles",
        _uuid_pk(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("treatment_start_date", sa.Date(), nullable=True),
        sa.Column("kit_type", sa.String(16), nullable=True),
        sa.Column("weight", sa.Numeric(6, 2), nullable=True),
        sa.Column("height", sa.Numeric(6, 2), nullable=True),
        sa.Column("imc", sa.Numeric(5, 2), nullable=True),
        sa.Column("imc_category", sa.String(16), nullable=True),
        sa.Column("water_goal", sa.Integer(), nullable=False, server_default=sa.text("2000")),
        sa.Column("onboarding_completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("push_activated", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("state_version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("last_active_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint(
            "kit_type IS NULL OR kit_type IN ('1_pote','2_potes','3_potes','5_potes')",
            name="ck_profiles_kit_type",
        ),
        sa.CheckConstraint(
            "imc_category IS NULL OR imc_category IN ('underweight','normal','overweight','obese')",
            name="ck_profiles_imc_category",
        ),
        sa.CheckConstraint("state_version >= 1", name="ck_profiles_state_version_positive"),
        sa.UniqueConstraint("user_id", name="uq_profiles_user_id"),
    )
    op.create_index("idx_profiles_treatment_start_date", "profiles", ["treatment_start_date"])

    op.create_table(
        "user_roles",
        _uuid_pk(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("role", sa.String(16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("role IN ('admin','user')", name="ck_user_roles_role"),
        sa.UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )

    op.create_table(
        "wallets",
        _uuid_pk(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("balance", sa.Numeric(12, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("referral_code", sa.String(16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("balance >= 0", name="ck_wallets_balance_non_negative"),
        sa.UniqueConstraint("user_id", name="uq_wallets_user_id"),
        sa.UniqueConstraint("referral_code", name="uq_wallets_referral_code"),
    )
    op.create_index(
        "idx_wallets_balance_updated_at",
        "wallets",
        ["updated_at"],
        postgresql_where=sa.text("balance > 0"),
    )

    op.create_table(
        "referrals",
        _uuid_pk(),
        sa.Column("referrer_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("referral_code", sa.String(16), nullable=False),
        sa.Column("referred_email", sa.Text(), nullable=True),
        sa.Column("referred_user_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("kiwify_order_id", sa.String(128), nullable=True),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("credit_amount", sa.Numeric(12, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("converted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("status IN ('pending','approved','converted')", name="ck_referrals_status"),
        sa.UniqueConstraint("kiwify_order_id", name="uq_referrals_kiwify_order_id"),
    )
    op.create_index("idx_referrals_referrer_created", "referrals", ["referrer_id", "created_at"])
    op.create_index("idx_referrals_code", "referrals", ["referral_code"])

    op.create_table(
        "wallet_transactions",
        _uuid_pk(),
        sa.Column("wallet_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("type", sa.String(16), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("referral_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("idempotency_key", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("type IN ('credit','purchase','expiration')", name="ck_wallet_transactions_type"),
        sa.CheckConstraint("amount <> 0", name="ck_wallet_transactions_amount_non_zero"),
        sa.CheckConstraint(
            "(type = 'credit' AND amount > 0) OR (type <> 'credit' AND amount < 0)",
            name="ck_wallet_transactions_amount_sign",
        ),
        sa.ForeignKeyConstraint(["wallet_id"], ["wallets.id"]),
        sa.ForeignKeyConstraint(["referral_id"], ["referrals.id"]),
        sa.UniqueConstraint("idempotency_key", name="uq_wallet_transactions_idempotency_key"),
    )
    op.create_index(
        "idx_wallet_transactions_wallet_created",
        "wallet_transactions",
        ["wallet_id", "created_at"],
    )
    op.create_index(
        "idx_wallet_transactions_user_created",
        "wallet_transactions",
        ["user_id", "created_at"],
    )

    op.create_table(
        "affiliates",
        _uuid_pk(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("affiliate_code", sa.String(16), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("pix_key", sa.Text(), nullable=True),
        sa.Column("pix_key_type", sa.String(16), nullable=True),
        sa.Column("total_sales", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("total_commission", sa.Numeric(12, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("total_sales >= 0", name="ck_affiliates_total_sales_non_negative"),
        sa.CheckConstraint("total_commission >= 0", name="ck_affiliates_total_commission_non_negative"),
        sa.UniqueConstraint("user_id", name="uq_affiliates_user_id"),
        sa.UniqueConstraint("affiliate_code", name="uq_affiliates_affiliate_code"),
    )

    op.create_table(
        "affiliate_sales",
        _uuid_pk(),
        sa.Column("affiliate_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("order_id", sa.String(128), nullable=False),
        sa.Column("sale_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("commission_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("customer_email", sa.Text(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("status IN ('approved','paid','canceled')", name="ck_affiliate_sales_status"),
        sa.CheckConstraint("sale_amount > 0", name="ck_affiliate_sales_sale_amount_positive"),
        sa.CheckConstraint("commission_amount >= 0", name="ck_affiliate_sales_commission_non_negative"),
        sa.ForeignKeyConstraint(["affiliate_id"], ["affiliates.id"]),
        sa.UniqueConstraint("order_id", name="uq_affiliate_sales_order_id"),
    )
    op.create_index(
        "idx_affiliate_sales_affiliate_created",
        "affiliate_sales",
        ["affiliate_id", "created_at"],
    )
    op.create_index("idx_affiliate_sales_created", "affiliate_sales", ["created_at"])

    op.create_table(
        "pix_withdrawals",
        _uuid_pk(),
        sa.Column("affiliate_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("pix_key", sa.Text(), nullable=False),
        sa.Column("pix_key_type", sa.String(16), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("requested_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reviewed_by", postgresql.UUID(as_uuid=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('pending','approved','rejected','paid')",
            name="ck_pix_withdrawals_status",
        ),
        sa.CheckConstraint("amount > 0", name="ck_pix_withdrawals_amount_positive"),
        sa.ForeignKeyConstraint(["affiliate_id"], ["affiliates.id"]),
    )
    op.create_index(
        "idx_pix_withdrawals_affiliate_status",
        "pix_withdrawals",
        ["affiliate_id", "status"],
    )
    op.create_index(
        "uq_pix_withdrawals_single_pending",
        "pix_withdrawals",
        ["affiliate_id"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )

    op.create_table(
        "orders",
        _uuid_pk(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("stripe_session_id", sa.String(255), nullable=False),
        sa.Column("stripe_payment_intent_id", sa.String(255), nullable=True),
        sa.Column("status", sa.String(24), nullable=False),
        sa.Column("amount_total", sa.BigInteger(), nullable=False, server_default=sa.text("0")),
        sa.Column("currency", sa.String(8), nullable=False, server_default=sa.text("'brl'")),
        sa.Column("customer_email", sa.Text(), nullable=True),
        sa.Column("items", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('pending','paid','pending_payment','payment_failed','refunded')",
            name="ck_orders_status",
        ),
        sa.CheckConstraint("amount_total >= 0", name="ck_orders_amount_total_non_negative"),
        sa.UniqueConstraint("stripe_session_id", name="uq_orders_stripe_session_id"),
    )
    op.create_index("idx_orders_user_created", "orders", ["user_id", "created_at"])
    op.create_index("idx_orders_payment_intent", "orders", ["stripe_payment_intent_id"])

    op.create_table(
        "reservations",
        _uuid_pk(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("phone", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("product_title", sa.Text(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    )


def downgrade() -> None:
    op.drop_table("reservations")
    op.drop_index("idx_orders_payment_intent", table_name="orders")
    op.drop_index("idx_orders_user_created", table_name="orders")
    op.drop_table("orders")
    op.drop_index("uq_pix_withdrawals_single_pending", table_name="pix_withdrawals")
    op.drop_index("idx_pix_withdrawals_affiliate_status", table_name="pix_withdrawals")
    op.drop_table("pix_withdrawals")
    op.drop_index("idx_affiliate_sales_created", table_name="affiliate_sales")
    op.drop_index("idx_affiliate_sales_affiliate_created", table_name="affiliate_sales")
    op.drop_table("affiliate_sales")
    op.drop_table("affiliates")
    op.drop_index("idx_wallet_transactions_user_created", table_name="wallet_transactions")
    op.drop_index("idx_wallet_transactions_wallet_created", table_name="wallet_transactions")
    op.drop_table("wallet_transactions")
    op.drop_index("idx_referrals_code", table_name="referrals")
    op.drop_index("idx_referrals_referrer_created", table_name="referrals")
    op.drop_table("referrals")
    op.drop_index("idx_wallets_balance_updated_at", table_name="wallets")
    op.drop_table("wallets")
    op.drop_table("user_roles")
    op.drop_index("idx_profiles_treatment_start_date", table_name="profiles")
    op.drop_table("profiles")
