# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/__init__.py

Repositorios del módulo Payments.
"""

from .credit_transaction_repository import CreditTransactionRepository
from .payment_repository import PaymentRepository, PaymentStats
from .wallet_repository import BalanceRow, WalletRepository

__all__ = [
    "BalanceRow",
    "CreditTransactionRepository",
    "PaymentRepository",
    "PaymentStats",
    "WalletRepository",
]
