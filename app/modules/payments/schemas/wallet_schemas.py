# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/wallet_schemas.py

Contratos de /api/credits (saldo, cargos/abonos manuales e historial).

Fecha: 17/10/2026
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from app.shared.utils.base_models import ApiModel, OffsetPagination
from app.modules.payments.enums import CreditTxType

MAX_REASON_LENGTH = 500


class CreditsBalance(ApiModel):
    current_balance: int
    total_credits_used: int


class CreditOperationRequest(ApiModel):
    """El tope por operación se valida en la ruta (depende de settings)."""

    amount: int = Field(gt=0, strict=True)
    reason: str = Field(min_length=1, max_length=MAX_REASON_LENGTH)

    @field_validator("reason")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("reason must not be empty")
        return value


class DeductResult(ApiModel):
    previous_balance: int
    amount_deducted: int
    new_balance: int
    total_credits_used: int
    reason: str
    timestamp: datetime


class AddResult(ApiModel):
    previous_balance: int
    amount_added: int
    new_balance: int
    total_credits_used: int
    reason: str
    timestamp: datetime


class CreditTransactionOut(ApiModel):
    id: int
    tx_type: CreditTxType
    credits_delta: int
    balance_after: int
    operation_code: str
    description: Optional[str] = None
    payment_id: Optional[int] = None
    video_id: Optional[int] = None
    metadata: Optional[dict[str, Any]] = Field(default=None, validation_alias="tx_metadata")
    created_at: datetime


class CreditHistory(ApiModel):
    transactions: list[CreditTransactionOut]
    pagination: OffsetPagination


__all__ = [
    "AddResult",
    "CreditHistory",
    "CreditOperationRequest",
    "CreditTransactionOut",
    "CreditsBalance",
    "DeductResult",
    "MAX_REASON_LENGTH",
]

# Fin del archivo app/modules/payments/schemas/wallet_schemas.py
