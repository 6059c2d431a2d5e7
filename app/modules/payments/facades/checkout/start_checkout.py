# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/checkout/start_checkout.py

Fachada de alto nivel para iniciar la compra de créditos.

Orquesta:
1. Validación de créditos y cálculo del monto (unidades mayores)
2. Creación del Payment interno en PENDING (flush, sin commit)
3. Creación de la sesión en el gateway con payment_id en metadata
4. Registro de gateway_session_id en el Payment

El commit lo hace la ruta. Si el gateway falla no se confirma nada y se
lanza UpstreamProviderError.

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings
from app.shared.utils.http_exceptions import UpstreamProviderError
from app.modules.payments.schemas import CheckoutResponse
from app.modules.payments.services.payment_service import PaymentService
from app.modules.providers.payment import PaymentProvider, get_payment_provider

from .validators import compute_checkout_amount

logger = logging.getLogger(__name__)


async def start_checkout(
    session: AsyncSession,
    *,
    user_id: int,
    credits: int,
    payment_service: PaymentService,
    provider: Optional[PaymentProvider] = None,
    settings: Optional[PaymentsSettings] = None,
) -> CheckoutResponse:
    settings = settings or get_payments_settings()

    # 1) Reglas de negocio
    amount = compute_checkout_amount(credits, settings)

    # 2) Payment interno
    provider = provider or get_payment_provider(settings.payment_provider)
    description = f"Purchase of {credits} credits"
    payment = await payment_service.create_pending(
        session,
        user_id=user_id,
        amount=amount,
        currency=settings.payment_currency,
        credits_awarded=credits,
        payment_gateway=provider.name,
        metadata={"package_type": "custom", "description": description},
    )

    # 3) Sesión en el gateway
    result = await provider.create_checkout_session(
        {
            "amount": amount,
            "currency": settings.payment_currency,
            "user_id": user_id,
            "credits_awarded": credits,
            "success_url": settings.checkout_success_url,
            "cancel_url": settings.payment_cancel_url,
            "metadata": {"payment_id": payment.id},
        }
    )
    if not result["success"]:
        error = result["error"]
        logger.error(
            "Checkout session failed payment_id=%s provider=%s: %s",
            payment.id, provider.name, error["message"],
        )
        raise UpstreamProviderError(
            error["message"],
            provider=provider.name,
            upstream_status=error.get("status"),
            code=error.get("code"),
        )

    data = result["data"]

    # 4) Vincular la sesión del gateway
    await payment_service.attach_gateway_session(session, payment, data["session_id"])

    return CheckoutResponse(
        session_id=data["session_id"],
        url=data.get("url"),
        payment_id=payment.id,
        amount=data["amount"],
        currency=str(data["currency"]).upper(),
        credits_awarded=credits,
    )


__all__ = ["start_checkout"]

# Fin del archivo app/modules/payments/facades/checkout/start_checkout.py
