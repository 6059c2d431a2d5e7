# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/__init__.py

Superficie de exportación de enums del módulo Payments.
"""

from .credit_tx_type_enum import CreditTxType
from .payment_status_enum import PaymentStatus

__all__ = [
    "CreditTxType",
    "PaymentStatus",
]
