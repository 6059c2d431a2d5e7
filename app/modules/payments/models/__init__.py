# -*- coding: utf-8 -*-
"""
app/modules/payments/models/__init__.py

Modelos ORM del módulo Payments.

User se importa primero para que la tabla users esté en el metadata
antes de resolver las FKs de wallets, payments y credit_transactions.
"""

from app.modules.auth.models.user_models import User  # noqa: F401

from .wallet_models import Wallet
from .payment_models import Payment
from .credit_transaction_models import CreditTransaction

__all__ = [
    "CreditTransaction",
    "Payment",
    "Wallet",
]
