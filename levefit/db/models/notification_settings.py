from __future__ import annotations

from datetime import datetime, time
from uuid import UUID, uuid4

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, Time, text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from levefit.db.models.base import Base


class NotificationSettings(Base):
    __tablename__ = "notification_settings"
    __table_args__ = (
        CheckConstraint(
            "water_interval IS NULL OR water_interval > 0",
            name="ck_notification_settings_water_interval_positive",
        ),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), unique=True, nullable=False)
    capsule_reminder: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
    capsule_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    water_reminder: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("true"))
    water_interval: Mapped[int | None] = mapped_column(Integer, nullable=True)
    last_water_notification: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
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
