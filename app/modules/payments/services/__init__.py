# -*- coding: utf-8 -*-
"""
app/modules/payments/services/__init__.py

Servicios del módulo Payments.
"""

from .payment_service import PaymentService, SettlementResult
from .wallet_service import BalanceChange, WalletService

__all__ = [
    "BalanceChange",
    "PaymentService",
    "SettlementResult",
    "WalletService",
]
