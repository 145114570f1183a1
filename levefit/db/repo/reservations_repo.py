from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from levefit.db.models.reservations import Reservation


class ReservationsRepo:
    @staticmethod
    async def create(session: AsyncSession, *, reservation: Reservation) -> Reservation:
        session.add(reservation)
        await session.flush()
        return reservation
