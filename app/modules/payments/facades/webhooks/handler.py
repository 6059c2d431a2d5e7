# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/handler.py

Verificación y despacho de webhooks del gateway de pagos.

1. Verifica la firma sobre el body crudo (sin parsear antes)
2. Traduce el evento con el proveedor
3. Despacha al estado de liquidación:
   - checkout.session.completed      -> PaymentService.complete_payment
   - payment_intent.payment_failed   -> PaymentService.mark_failed
   - charge.refunded                 -> se registra y se devuelve, sin tocar saldo
   - otros                           -> acuse sin efecto

No hace commit: la ruta confirma si todo salió bien y revierte si no,
respondiendo no-2xx para que el gateway reintente la entrega.

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.payments.services.payment_service import PaymentService
from app.modules.providers.payment import PaymentProvider

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"
PAYMENT_FAILED = "payment_intent.payment_failed"
CHARGE_REFUNDED = "charge.refunded"

# checkout.session.completed con estos payment_status aún no está cobrado
UNPAID_STATUSES = frozenset({"unpaid"})


async def handle_payment_webhook(
    session: AsyncSession,
    *,
    raw_body: bytes,
    signature: Optional[str],
    provider: PaymentProvider,
    payment_service: PaymentService,
) -> dict[str, Any]:
    """
    Procesa un webhook y devuelve el resultado para la respuesta HTTP.

    Raises:
        WebhookSignatureError: firma inválida o ausente (sin cambios de estado)
        PaymentNotFoundError: sesión completada sin Payment local
        PaymentStateError: transición inválida
    """
    event = provider.verify_webhook_signature(raw_body, signature)
    parsed = await provider.handle_webhook_event(event)
    event_type = parsed.get("event_type")
    data = parsed.get("data") or {}

    result: dict[str, Any] = {"event_type": event_type, "event_id": event.get("id")}

    if event_type == CHECKOUT_COMPLETED:
        if data.get("payment_status") in UNPAID_STATUSES:
            logger.info("Checkout session %s completed but unpaid; waiting", data.get("session_id"))
            result["processed"] = False
            return result

        settlement = await payment_service.complete_payment(
            session,
            gateway_session_id=data["session_id"],
            gateway_payment_id=data.get("payment_intent_id"),
        )
        result.update(
            processed=True,
            payment_id=settlement.payment.id,
            already_completed=settlement.already_completed,
            credits_awarded=settlement.payment.credits_awarded,
        )
        if settlement.balance_change is not None:
            result["new_balance"] = settlement.balance_change.new_balance
        return result

    if event_type == PAYMENT_FAILED:
        error = data.get("last_payment_error") or {}
        payment = await payment_service.mark_failed(
            session,
            gateway_payment_id=data.get("payment_intent_id"),
            payment_id=data.get("payment_id"),
            error_code=error.get("code"),
            error_message=error.get("message"),
        )
        result.update(
            processed=payment is not None,
            payment_id=payment.id if payment is not None else None,
            status=str(payment.status) if payment is not None else None,
        )
        return result

    if event_type == CHARGE_REFUNDED:
        logger.info(
            "Charge refunded payment_intent=%s amount_refunded=%s full=%s (no balance change)",
            data.get("payment_intent_id"), data.get("amount_refunded"), data.get("full_refund"),
        )
        result.update(processed=False, refund=data)
        return result

    result.update(processed=False, message=parsed.get("message"))
    if data:
        result["data"] = data
    return result


__all__ = ["handle_payment_webhook"]

# Fin del archivo app/modules/payments/facades/webhooks/handler.py
