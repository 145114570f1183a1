from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from levefit.db.models.base import Base


class CompletedExercise(Base):
    __tablename__ = "completed_exercises"
    __table_args__ = (
        UniqueConstraint("user_id", "exercise_id", name="uq_completed_exercises_user_item"),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False)
    exercise_id: Mapped[str] = mapped_column(String(64), nullable=False)
    exercise_name: Mapped[str] = mapped_column(Text, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class CompletedRecipe(Base):
    __tablename__ = "completed_recipes"
    __table_args__ = (
        UniqueConstraint("user_id", "recipe_id", name="uq_completed_recipes_user_item"),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False)
    recipe_id: Mapped[str] = mapped_column(String(64), nullable=False)
    recipe_name: Mapped[str] = mapped_column(Text, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class CompletedDetox(Base):
    __tablename__ = "completed_detox"
    __table_args__ = (UniqueConstraint("user_id", "detox_id", name="uq_completed_detox_user_item"),)

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False)
    detox_id: Mapped[str] = mapped_column(String(64), nullable=False)
    detox_name: Mapped[str] = mapped_column(Text, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
