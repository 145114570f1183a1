from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from levefit.db.models.base import Base


class Profile(Base):
    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint(
            "kit_type IS NULL OR kit_type IN ('1_pote','2_potes','3_potes','5_potes')",
            name="ck_profiles_kit_type",
        ),
        CheckConstraint(
            "imc_category IS NULL OR imc_category IN ('underweight','normal','overweight','obese')",
            name="ck_profiles_imc_category",
        ),
        CheckConstraint("state_version >= 1", name="ck_profiles_state_version_positive"),
        Index("idx_profiles_treatment_start_date", "treatment_start_date"),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    treatment_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    kit_type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    weight: Mapped[Decimal | None] = mapped_column(Numeric(6, 2), nullable=True)
    height: Mapped[Decimal | None] = mapped_column(Numeric(6, 2), nullable=True)
    imc: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    imc_category: Mapped[str | None] = mapped_column(String(16), nullable=True)
    water_goal: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("2000"))
    onboarding_completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    push_activated: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    state_version: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("1"))
    last_active_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )
