# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/payment_repository.py

Repositorio para la tabla payments.

transition_status() es el compare-and-swap del estado: el UPDATE solo
afecta la fila si sigue en el estado esperado, así dos entregas
concurrentes del mismo webhook no pueden liquidar dos veces.

Fecha: 17/10/2026
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, NamedTuple, Optional, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.payments.enums import PaymentStatus
from app.modules.payments.models.payment_models import Payment


class PaymentStats(NamedTuple):
    total_payments: int
    total_amount_spent: Decimal
    total_credits_purchased: int


class PaymentRepository(BaseRepository[Payment]):
    def __init__(self):
        super().__init__(Payment)

    # -----------------------------------------------------------
    # Búsquedas por identificadores del gateway
    # -----------------------------------------------------------
    async def get_by_session_id(self, session: AsyncSession, gateway_session_id: str) -> Optional[Payment]:
        stmt = (
            select(Payment)
            .where(Payment.gateway_session_id == gateway_session_id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_by_gateway_payment_id(self, session: AsyncSession, gateway_payment_id: str) -> Optional[Payment]:
        stmt = (
            select(Payment)
            .where(Payment.gateway_payment_id == gateway_payment_id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    # -----------------------------------------------------------
    # Transición condicional de estado
    # -----------------------------------------------------------
    async def transition_status(
        self,
        session: AsyncSession,
        payment_id: int,
        *,
        from_status: PaymentStatus,
        to_status: PaymentStatus,
        **values: Any,
    ) -> bool:
        """True si esta llamada movió el pago; False si ya no estaba en from_status."""
        stmt = (
            update(Payment)
            .where(Payment.id == payment_id, Payment.status == from_status)
            .values(status=to_status, **values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount == 1

    # -----------------------------------------------------------
    # Historial y estadísticas
    # -----------------------------------------------------------
    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: int,
        *,
        status: Optional[PaymentStatus] = None,
        limit: int,
        offset: int = 0,
    ) -> Sequence[Payment]:
        return await self.page(
            session,
            *self._user_criteria(user_id, status),
            order_by=(Payment.created_at.desc(), Payment.id.desc()),
            limit=limit,
            offset=offset,
        )

    async def count_for_user(
        self, session: AsyncSession, user_id: int, *, status: Optional[PaymentStatus] = None
    ) -> int:
        return await self.count(session, *self._user_criteria(user_id, status))

    async def completed_stats(self, session: AsyncSession, user_id: int) -> PaymentStats:
        """Totales solo de pagos COMPLETED."""
        stmt = select(
            func.count(Payment.id),
            func.coalesce(func.sum(Payment.amount), 0),
            func.coalesce(func.sum(Payment.credits_awarded), 0),
        ).where(Payment.user_id == user_id, Payment.status == PaymentStatus.COMPLETED)
        count, amount, credits = (await session.execute(stmt)).one()
        return PaymentStats(
            total_payments=int(count),
            total_amount_spent=Decimal(str(amount)).quantize(Decimal("0.01")),
            total_credits_purchased=int(credits),
        )

    @staticmethod
    def _user_criteria(user_id: int, status: Optional[PaymentStatus]) -> list:
        criteria = [Payment.user_id == user_id]
        if status is not None:
            criteria.append(Payment.status == status)
        return criteria

# Fin del archivo app/modules/payments/repositories/payment_repository.py
