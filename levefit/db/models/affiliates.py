from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, Numeric, String, Text, text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from levefit.db.models.base import Base


class Affiliate(Base):
    __tablename__ = "affiliates"
    __table_args__ = (
        CheckConstraint("total_sales >= 0", name="ck_affiliates_total_sales_non_negative"),
        CheckConstraint(
            "total_commission >= 0",
            name="ck_affiliates_total_commission_non_negative",
        ),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), unique=True, nullable=False)
    affiliate_code: Mapped[str] = mapped_column(String(16), unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("true"))
    pix_key: Mapped[str | None] = mapped_column(Text, nullable=True)
    pix_key_type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    total_sales: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    total_commission: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, server_default=text("0")
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
