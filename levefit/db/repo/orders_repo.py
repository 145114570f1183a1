from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.orders import Order


class OrdersRepo:
    @staticmethod
    async def create(session: AsyncSession, *, order: Order) -> Order:
        session.add(order)
        await session.flush()
        return order

    @staticmethod
    async def get_by_session_id_for_update(
        session: AsyncSession,
        stripe_session_id: str,
    ) -> Order | None:
        stmt = select(Order).where(Order.stripe_session_id == stripe_session_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_by_payment_intent_for_update(
        session: AsyncSession,
        payment_intent_id: str,
    ) -> list[Order]:
        stmt = (
            select(Order)
            .where(Order.stripe_payment_intent_id == payment_intent_id)
            .with_for_update()
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
