# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/checkout/validators.py

Reglas de negocio del checkout: rango de créditos, cálculo del monto y
tope por pago.

Fecha: 17/10/2026
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings
from app.shared.utils.http_exceptions import PaymentLimitError, ValidationError

TWO_PLACES = Decimal("0.01")


def compute_checkout_amount(credits: int, settings: Optional[PaymentsSettings] = None) -> Decimal:
    """
    Valida `credits` y devuelve el monto en unidades mayores.

    Raises:
        ValidationError: credits fuera de [MIN_PURCHASE_CREDITS, MAX_PURCHASE_CREDITS]
        PaymentLimitError: el monto supera MAX_PAYMENT_AMOUNT
    """
    settings = settings or get_payments_settings()

    if isinstance(credits, bool) or not isinstance(credits, int):
        raise ValidationError("credits must be an integer", fields=["credits"])
    if not settings.min_purchase_credits <= credits <= settings.max_purchase_credits:
        raise ValidationError(
            f"credits must be between {settings.min_purchase_credits} "
            f"and {settings.max_purchase_credits}",
            fields=["credits"],
        )

    amount = (Decimal(credits) * settings.price_per_credit).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    if amount > settings.max_payment_amount:
        raise PaymentLimitError(
            f"Payment amount {amount} exceeds the maximum of {settings.max_payment_amount}",
            fields=["credits"],
            data={
                "fields": ["credits"],
                "amount": str(amount),
                "max_amount": str(settings.max_payment_amount),
            },
        )
    return amount


__all__ = ["compute_checkout_amount"]

# Fin del archivo app/modules/payments/facades/checkout/validators.py
