# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/__init__.py

Esquemas Pydantic del módulo Payments (JSON en camelCase).
"""

from __future__ import annotations

from .checkout_schemas import (
    CancelView,
    CheckoutRequest,
    CheckoutResponse,
    PaymentHistory,
    PaymentOut,
    PaymentStatsOut,
    PaymentStatusView,
)
from .wallet_schemas import (
    AddResult,
    CreditHistory,
    CreditOperationRequest,
    CreditsBalance,
    CreditTransactionOut,
    DeductResult,
)

__all__ = [
    "AddResult",
    "CancelView",
    "CheckoutRequest",
    "CheckoutResponse",
    "CreditHistory",
    "CreditOperationRequest",
    "CreditTransactionOut",
    "CreditsBalance",
    "DeductResult",
    "PaymentHistory",
    "PaymentOut",
    "PaymentStatsOut",
    "PaymentStatusView",
]
