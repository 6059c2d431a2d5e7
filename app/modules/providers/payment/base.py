# -*- coding: utf-8 -*-
"""
app/modules/providers/payment/base.py

Contrato de proveedores de pago.

Capacidad obligatoria: create_checkout_session(params). Además cada
proveedor verifica la firma de sus webhooks sobre el body crudo y
traduce sus eventos a {success, event_type, data}.

Unidades: `amount` llega en unidades mayores (Decimal, p.ej. 1.00 USD);
cada adaptador convierte a la unidad del gateway en su propio borde.

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

from app.shared.utils.http_exceptions import ProviderNotImplementedError, ValidationError
from app.modules.providers.base import BaseProvider

logger = logging.getLogger(__name__)

CHECKOUT_REQUIRED_FIELDS = (
    "amount",
    "currency",
    "user_id",
    "credits_awarded",
    "success_url",
    "cancel_url",
)


def is_valid_url(url: Any) -> bool:
    if not isinstance(url, str):
        return False
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class PaymentProvider(BaseProvider):
    """Base de proveedores de pago."""

    async def create_checkout_session(self, params: Mapping[str, Any]) -> dict[str, Any]:
        raise ProviderNotImplementedError(
            f"{type(self).__name__}.create_checkout_session() must be implemented by a concrete provider"
        )

    def verify_webhook_signature(
        self, raw_body: bytes, signature: Optional[str], secret: Optional[str] = None
    ) -> dict[str, Any]:
        raise ProviderNotImplementedError(f"{self.name} does not verify webhooks")

    async def handle_webhook_event(self, event: Mapping[str, Any]) -> dict[str, Any]:
        raise ProviderNotImplementedError(f"{self.name} does not handle webhook events")

    async def get_payment_details(self, payment_id: str) -> dict[str, Any]:
        raise ProviderNotImplementedError(f"{self.name} does not expose payment details")

    async def create_refund(self, gateway_payment_id: str, amount: Optional[Decimal] = None) -> dict[str, Any]:
        raise ProviderNotImplementedError(f"{self.name} does not support refunds")

    # -----------------------------------------------------------
    # Validación
    # -----------------------------------------------------------
    def validate_checkout_params(self, params: Any) -> None:
        """Valida todos los campos antes de hablar con el gateway."""
        self.validate_required(params, CHECKOUT_REQUIRED_FIELDS)

        errors: list[str] = []
        fields: list[str] = []

        try:
            amount = Decimal(str(params["amount"]))
        except (InvalidOperation, ValueError):
            amount = None
        if isinstance(params["amount"], bool) or amount is None or not amount.is_finite() or amount <= 0:
            errors.append("amount must be a positive number")
            fields.append("amount")

        credits = params["credits_awarded"]
        if isinstance(credits, bool) or not isinstance(credits, int) or credits <= 0:
            errors.append("credits_awarded must be a positive integer")
            fields.append("credits_awarded")

        for field in ("success_url", "cancel_url"):
            if not is_valid_url(params[field]):
                errors.append(f"{field} must be a valid URL")
                fields.append(field)

        if errors:
            raise ValidationError("; ".join(errors), fields=fields)


__all__ = ["CHECKOUT_REQUIRED_FIELDS", "PaymentProvider", "is_valid_url"]

# Fin del archivo app/modules/providers/payment/base.py
