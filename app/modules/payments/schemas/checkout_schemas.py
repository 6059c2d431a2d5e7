# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/checkout_schemas.py

Contratos de /api/payment: checkout, vistas de éxito/cancelación e
historial de pagos.

Fecha: 17/10/2026
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import Field, field_serializer

from app.shared.utils.base_models import ApiModel, OffsetPagination
from app.modules.payments.enums import PaymentStatus


class CheckoutRequest(ApiModel):
    credits: int = Field(gt=0, strict=True, description="Créditos a comprar.")


class CheckoutResponse(ApiModel):
    session_id: str
    url: Optional[str] = None
    payment_id: int
    amount: int = Field(description="Monto en la unidad del gateway (centavos).")
    currency: str
    credits_awarded: int


class PaymentStatusView(ApiModel):
    payment_id: int
    status: PaymentStatus
    credits_awarded: int
    amount: Decimal
    currency: str

    @field_serializer("amount")
    def _amount(self, value: Decimal) -> float:
        return float(value)


class CancelView(ApiModel):
    cancelled: bool = True


class PaymentOut(ApiModel):
    id: int
    amount: Decimal
    currency: str
    credits_awarded: int
    status: PaymentStatus
    payment_gateway: str
    gateway_session_id: Optional[str] = None
    gateway_payment_id: Optional[str] = None
    metadata: Optional[dict[str, Any]] = Field(default=None, validation_alias="payment_metadata")
    created_at: datetime
    completed_at: Optional[datetime] = None

    @field_serializer("amount")
    def _amount(self, value: Decimal) -> float:
        return float(value)


class PaymentStatsOut(ApiModel):
    total_payments: int
    total_amount_spent: Decimal
    total_credits_purchased: int

    @field_serializer("total_amount_spent")
    def _amount(self, value: Decimal) -> float:
        return float(value)


class PaymentHistory(ApiModel):
    payments: list[PaymentOut]
    stats: PaymentStatsOut
    pagination: OffsetPagination


__all__ = [
    "CancelView",
    "CheckoutRequest",
    "CheckoutResponse",
    "PaymentHistory",
    "PaymentOut",
    "PaymentStatsOut",
    "PaymentStatusView",
]

# Fin del archivo app/modules/payments/schemas/checkout_schemas.py
