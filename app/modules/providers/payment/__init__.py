# -*- coding: utf-8 -*-
"""
app/modules/providers/payment/__init__.py

Proveedores de pago.
"""

from .base import PaymentProvider
from .factory import (
    BUILTIN_PAYMENT_PROVIDERS,
    get_payment_provider,
    payment_providers,
    register_builtin_payment_providers,
)
from .stripe_provider import StripeProvider, from_cents, to_cents

__all__ = [
    "BUILTIN_PAYMENT_PROVIDERS",
    "PaymentProvider",
    "StripeProvider",
    "from_cents",
    "get_payment_provider",
    "payment_providers",
    "register_builtin_payment_providers",
    "to_cents",
]
