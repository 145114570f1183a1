from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from levefit.db.models.base import Base


class AffiliateSale(Base):
    __tablename__ = "affiliate_sales"
    __table_args__ = (
        CheckConstraint("status IN ('approved','paid','canceled')", name="ck_affiliate_sales_status"),
        CheckConstraint("sale_amount > 0", name="ck_affiliate_sales_sale_amount_positive"),
        CheckConstraint(
            "commission_amount >= 0",
            name="ck_affiliate_sales_commission_non_negative",
        ),
        Index("idx_affiliate_sales_affiliate_created", "affiliate_id", "created_at"),
        Index("idx_affiliate_sales_created", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4)
    affiliate_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("affiliates.id"),
        nullable=False,
    )
    order_id: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    sale_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    commission_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    customer_email: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    paid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
