from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from html import escape
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from levefit.core.local_time import local_now
from levefit.db.models.reservations import Reservation
from levefit.db.repo.reservations_repo import ReservationsRepo
from levefit.economy.checkout.constants import DEFAULT_RESERVATION_AMOUNT


def format_phone(phone: str) -> str:
    if len(phone) == 11 and phone.isdigit():
        return f"({phone[:2]}) {phone[2:7]}-{phone[7:]}"
    return phone


def format_brl(amount: Decimal) -> str:
    return f"R$ {amount:.2f}".replace(".", ",")


def build_reservation_email(reservation: Reservation, *, now_utc: datetime) -> tuple[str, str]:
    subject = f"🎯 Nova Reserva: {reservation.product_title}"
    received_at = local_now(now_utc).strftime("%d/%m/%Y %H:%M:%S")
    html = (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        '<h1 style="color: #16a34a;">Nova Reserva Recebida! 🎉</h1>'
        f"<h2>{escape(reservation.product_title)}</h2>"
        f"<p><strong>Nome:</strong> {escape(reservation.name)}</p>"
        f"<p><strong>Telefone:</strong> {escape(format_phone(reservation.phone))}</p>"
        f"<p><strong>E-mail:</strong> {escape(reservation.email)}</p>"
        f"<p><strong>Valor:</strong> {format_brl(reservation.amount)}</p>"
        f'<p style="color: #888;">Reserva recebida em {received_at}</p>'
        "</div>"
    )
    return subject, html


class ReservationService:
    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        name: str,
        phone: str,
        email: str,
        product_title: str,
        amount: Decimal | None,
        user_id: UUID | None,
        now_utc: datetime,
    ) -> Reservation:
        return await ReservationsRepo.create(
            session,
            reservation=Reservation(
                name=name,
                phone=phone,
                email=email,
                product_title=product_title,
                amount=amount if amount else DEFAULT_RESERVATION_AMOUNT,
                user_id=user_id,
                created_at=now_utc,
            ),
        )
