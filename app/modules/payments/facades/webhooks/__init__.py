# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/__init__.py

Procesamiento de webhooks del gateway de pagos.
"""

from .handler import handle_payment_webhook

__all__ = ["handle_payment_webhook"]
