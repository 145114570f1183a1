"""wallet_transactions_append_only

Revision ID: 7c3d2e5f0a32
Revises: 5b2e1d4c9f21
Create Date: 2026-10-05 10:00:00.000000
"""

from collections.abc import Sequence

from alembic import op

revision: str = "7c3d2e5f0a32"
down_revision: str | None = "5b2e1d4c9f21"
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.execute(
        """
        CREATE OR REPLACE FUNCTION fn_wallet_transactions_append_only()
        RETURNS trigger
        LANGUAGE plpgsql
        AS $$
        BEGIN
            RAISE EXCEPTION 'wallet_transactions is append-only';
        END;
        $$;
        """
    )
    op.execute(
        """
        CREATE TRIGGER trg_wallet_transactions_append_only
        BEFORE UPDATE OR DELETE ON wallet_transactions
        FOR EACH ROW
        EXECUTE FUNCTION fn_wallet_transactions_append_only();
        """
    )


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS trg_wallet_transactions_append_only ON wallet_transactions;")
    op.execute("DROP FUNCTION IF EXISTS fn_wallet_transactions_append_only();")
