# -*- coding: utf-8 -*-
"""
app/modules/payments/services/payment_service.py

Máquina de estados de liquidación de pagos.

    PENDING -> COMPLETED   (checkout.session.completed, una sola vez)
    PENDING -> FAILED      (payment_intent.payment_failed)
    COMPLETED -> REFUNDED  (operación fuera de banda)

La liquidación (COMPLETED + abono de credits_awarded) ocurre dentro de la
transacción del llamador: ambas escrituras se confirman juntas o ninguna.
Una segunda entrega del mismo evento devuelve already_completed=True sin
tocar la wallet.

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.utils.http_exceptions import (
    ForbiddenError,
    PaymentNotFoundError,
    PaymentStateError,
)
from app.modules.payments.enums import PaymentStatus
from app.modules.payments.models.payment_models import Payment
from app.modules.payments.repositories.payment_repository import PaymentRepository, PaymentStats
from app.modules.payments.services.wallet_service import BalanceChange, WalletService

logger = logging.getLogger(__name__)

# Estados desde los que checkout.session.completed liquida el pago
SETTLEABLE_STATUSES = (PaymentStatus.PENDING, PaymentStatus.FAILED)


@dataclass(frozen=True)
class SettlementResult:
    payment: Payment
    already_completed: bool
    balance_change: Optional[BalanceChange] = None


class PaymentService:
    """
    Ciclo de vida de un pago y su integración con el ledger de créditos.
    """

    def __init__(
        self,
        payment_repo: PaymentRepository,
        wallet_service: WalletService,
    ) -> None:
        self.payment_repo = payment_repo
        self.wallet_service = wallet_service

    # ------------------------------------------------------------------ #
    # Inicio de checkout
    # ------------------------------------------------------------------ #
    async def create_pending(
        self,
        session: AsyncSession,
        *,
        user_id: int,
        amount: Decimal,
        currency: str,
        credits_awarded: int,
        payment_gateway: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Payment:
        """Registra el intento de pago en PENDING (aún sin sesión del gateway)."""
        payment = await self.payment_repo.create(
            session,
            user_id=user_id,
            amount=amount,
            currency=currency.upper(),
            credits_awarded=credits_awarded,
            status=PaymentStatus.PENDING,
            payment_gateway=payment_gateway,
            payment_metadata=metadata or {},
        )
        logger.info(
            "Payment created id=%s user_id=%s amount=%s %s credits=%d",
            payment.id, user_id, amount, currency, credits_awarded,
        )
        return payment

    async def attach_gateway_session(
        self, session: AsyncSession, payment: Payment, gateway_session_id: str
    ) -> Payment:
        payment.gateway_session_id = gateway_session_id
        await session.flush()
        return payment

    # ------------------------------------------------------------------ #
    # Liquidación (idempotente)
    # ------------------------------------------------------------------ #
    async def complete_payment(
        self,
        session: AsyncSession,
        *,
        gateway_session_id: str,
        gateway_payment_id: Optional[str] = None,
    ) -> SettlementResult:
        """
        Marca el pago COMPLETED y abona credits_awarded a la wallet.

        Raises:
            PaymentNotFoundError: no existe pago para la sesión (inconsistencia)
            PaymentStateError: el pago está REFUNDED
        """
        payment = await self.payment_repo.get_by_session_id(session, gateway_session_id)
        if payment is None:
            logger.error("Settlement for unknown gateway session %s", gateway_session_id)
            raise PaymentNotFoundError(f"No payment found for session {gateway_session_id}")

        if payment.status == PaymentStatus.COMPLETED:
            logger.info("Payment id=%s already completed (duplicate delivery ignored)", payment.id)
            return SettlementResult(payment=payment, already_completed=True)

        if payment.status not in SETTLEABLE_STATUSES:
            raise PaymentStateError(
                f"Payment {payment.id} cannot be completed from status {payment.status}",
                data={"payment_id": payment.id, "status": str(payment.status)},
            )

        # Un pago FAILED (tarjeta rechazada) puede cobrarse después en la misma sesión
        moved = False
        for from_status in SETTLEABLE_STATUSES:
            moved = await self.payment_repo.transition_status(
                session,
                payment.id,
                from_status=from_status,
                to_status=PaymentStatus.COMPLETED,
                gateway_payment_id=gateway_payment_id,
                completed_at=datetime.now(timezone.utc),
            )
            if moved:
                break
        if not moved:
            # Otra entrega ganó la carrera entre la lectura y el UPDATE
            current = await self.payment_repo.get_by_session_id(session, gateway_session_id)
            if current is not None and current.status == PaymentStatus.COMPLETED:
                logger.info("Payment id=%s completed concurrently (idempotent no-op)", payment.id)
                return SettlementResult(payment=current, already_completed=True)
            raise PaymentStateError(f"Payment {payment.id} changed state during settlement")

        change = await self.wallet_service.add(
            session,
            payment.user_id,
            payment.credits_awarded,
            operation_code="payment_settlement",
            description=f"Purchase of {payment.credits_awarded} credits",
            payment_id=payment.id,
        )
        payment = await self.payment_repo.get_by_session_id(session, gateway_session_id) or payment
        logger.info(
            "Payment id=%s settled user_id=%s credits=%d balance=%d",
            payment.id, payment.user_id, payment.credits_awarded, change.new_balance,
        )
        return SettlementResult(payment=payment, already_completed=False, balance_change=change)

    # ------------------------------------------------------------------ #
    # Fallo
    # ------------------------------------------------------------------ #
    async def mark_failed(
        self,
        session: AsyncSession,
        *,
        gateway_payment_id: Optional[str] = None,
        payment_id: Optional[int] = None,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> Optional[Payment]:
        """
        PENDING -> FAILED y agrega el detalle del error al metadata.
        Sin pago localizable devuelve None (el evento se acusa sin efecto).
        """
        payment = None
        if gateway_payment_id:
            payment = await self.payment_repo.get_by_gateway_payment_id(session, gateway_payment_id)
        if payment is None and payment_id is not None:
            payment = await self.payment_repo.get(session, payment_id)
        if payment is None:
            logger.info("Payment failure event without matching payment (%s)", gateway_payment_id)
            return None

        if payment.status != PaymentStatus.PENDING:
            logger.warning(
                "Ignoring failure for payment id=%s in status %s", payment.id, payment.status
            )
            return payment

        metadata = {
            **(payment.payment_metadata or {}),
            "error_details": {"code": error_code, "message": error_message},
            "failed_at": datetime.now(timezone.utc).isoformat(),
        }
        moved = await self.payment_repo.transition_status(
            session,
            payment.id,
            from_status=PaymentStatus.PENDING,
            to_status=PaymentStatus.FAILED,
            payment_metadata=metadata,
        )
        if moved:
            logger.info("Payment id=%s marked FAILED (%s)", payment.id, error_code)
        await session.refresh(payment)
        return payment

    # ------------------------------------------------------------------ #
    # Reembolso (fuera de banda, sin revertir créditos)
    # ------------------------------------------------------------------ #
    async def mark_refunded(self, session: AsyncSession, payment_id: int) -> Payment:
        payment = await self.payment_repo.get(session, payment_id)
        if payment is None:
            raise PaymentNotFoundError(f"Payment {payment_id} not found")
        if payment.status == PaymentStatus.REFUNDED:
            return payment

        moved = await self.payment_repo.transition_status(
            session,
            payment_id,
            from_status=PaymentStatus.COMPLETED,
            to_status=PaymentStatus.REFUNDED,
        )
        if not moved:
            raise PaymentStateError(
                f"Payment {payment_id} cannot be refunded from status {payment.status}"
            )
        await session.refresh(payment)
        logger.info("Payment id=%s marked REFUNDED", payment_id)
        return payment

    # ------------------------------------------------------------------ #
    # Consultas
    # ------------------------------------------------------------------ #
    async def get_for_user_by_session(
        self, session: AsyncSession, *, gateway_session_id: str, user_id: int
    ) -> Payment:
        payment = await self.payment_repo.get_by_session_id(session, gateway_session_id)
        if payment is None:
            raise PaymentNotFoundError("Payment not found")
        if payment.user_id != user_id:
            raise ForbiddenError("This payment belongs to another user")
        return payment

    async def history(
        self,
        session: AsyncSession,
        user_id: int,
        *,
        status: Optional[PaymentStatus] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[Sequence[Payment], int, PaymentStats]:
        items = await self.payment_repo.list_for_user(
            session, user_id, status=status, limit=limit, offset=offset
        )
        total = await self.payment_repo.count_for_user(session, user_id, status=status)
        stats = await self.payment_repo.completed_stats(session, user_id)
        return items, total, stats


__all__ = ["PaymentService", "SettlementResult"]

# Fin del archivo app/modules/payments/services/payment_service.py
