"""habits_notifications_points

Revision ID: 5b2e1d4c9f21
Revises: 3a1f0c2b7d10
Create Date: 2026-10-05 09:30:00.000000
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "5b2e1d4c9f21"
down_revision: str | None = "3a1f0c2b7d10"
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None

COMPLETED_ITEM_TABLES = (
    ("completed_exercises", "exercise"),
    ("completed_recipes", "recipe"),
    ("completed_detox", "detox"),
)


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        primary_key=True,
        server_default=sa.text("gen_random_uuid()"),
    )


def upgrade() -> None:
    op.create_table(
        "push_subscriptions",
        _uuid_pk(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("endpoint", sa.Text(), nullable=False),
        sa.Column("p256dh", sa.Text(), nullable=False),
        sa.Column("auth", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("endpoint", name="uq_push_subscriptions_endpoint"),
    )
    op.create_index("idx_push_subscriptions_user", "push_subscriptions", ["user_id"])

    op.create_table(
        "notification_settings",
        _uuid_pk(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("capsule_reminder", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("capsule_time", sa.Time(), nullable=True),
        sa.Column("water_reminder", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("water_interval", sa.Integer(), nullable=True),
        sa.Column("last_water_notification", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint(
            "water_interval IS NULL OR water_interval > 0",
            name="ck_notification_settings_water_interval_positive",
        ),
        sa.UniqueConstraint("user_id", name="uq_notification_settings_user_id"),
    )

    op.create_table(
        "capsule_days",
        _uuid_pk(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.UniqueConstraint("user_id", "date", name="uq_capsule_days_user_date"),
    )

    op.create_table(
        "water_intake_history",
        _uuid_pk(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("total_intake", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("total_intake >= 0", name="ck_water_intake_history_total_non_negative"),
        sa.UniqueConstraint("user_id", "date", name="uq_water_intake_history_user_date"),
    )

    for table_name, prefix in COMPLETED_ITEM_TABLES:
        op.create_table(
            table_name,
            _uuid_pk(),
            sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
            sa.Column(f"{prefix}_id", sa.String(64), nullable=False),
            sa.Column(f"{prefix}_name", sa.Text(), nullable=False),
            sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False),
            sa.UniqueConstraint("user_id", f"{prefix}_id", name=f"uq_{table_name}_user_item"),
        )

    op.create_table(
        "milestone_push_logs",
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("treatment_day", sa.SmallInteger(), nullable=False),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("user_id", "treatment_day"),
    )
    op.create_index("idx_milestone_push_logs_sent_at", "milestone_push_logs", ["sent_at"])

    op.create_table(
        "user_points",
        _uuid_pk(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("points >= 0", name="ck_user_points_points_non_negative"),
        sa.UniqueConstraint("user_id", name="uq_user_points_user_id"),
    )

    op.create_table(
        "points_history",
        _uuid_pk(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("action", sa.String(32), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("idx_points_history_user_created", "points_history", ["user_id", "created_at"])

    op.create_table(
        "rewards",
        _uuid_pk(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("points_cost", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("points_cost > 0", name="ck_rewards_points_cost_positive"),
    )

    op.create_table(
        "redeemed_rewards",
        _uuid_pk(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("reward_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("redeemed_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["reward_id"], ["rewards.id"]),
    )
    op.create_index("idx_redeemed_rewards_user", "redeemed_rewards", ["user_id"])


def downgrade() -> None:
    op.drop_index("idx_redeemed_rewards_user", table_name="redeemed_rewards")
    op.drop_table("redeemed_rewards")
    op.drop_table("rewards")
    op.drop_index("idx_points_history_user_created", table_name="points_history")
    op.drop_table("points_history")
    op.drop_table("user_points")
    op.drop_index("idx_milestone_push_logs_sent_at", table_name="milestone_push_logs")
    op.drop_table("milestone_push_logs")
    for table_name, _ in reversed(COMPLETED_ITEM_TABLES):
        op.drop_table(table_name)
    op.drop_table("water_intake_history")
    op.drop_table("capsule_days")
    op.drop_table("notification_settings")
    op.drop_index("idx_push_subscriptions_user", table_name="push_subscriptions")
    op.drop_table("push_subscriptions")
