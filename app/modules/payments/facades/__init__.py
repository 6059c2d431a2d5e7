# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/__init__.py

Fachadas del módulo Payments.

Este __init__ NO importa submódulos automáticamente para evitar ciclos;
cada fachada se importa desde su paquete:

    from app.modules.payments.facades.checkout import start_checkout
    from app.modules.payments.facades.webhooks import handle_payment_webhook

Fecha: 17/10/2026
"""

__all__: list[str] = []

# Fin del archivo app/modules/payments/facades/__init__.py
