# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/checkout/__init__.py

Submódulo de checkout del módulo Payments.
"""

from .start_checkout import start_checkout
from .validators import compute_checkout_amount

__all__ = ["compute_checkout_amount", "start_checkout"]
