# -*- coding: utf-8 -*-
"""
app/modules/payments/__init__.py

Módulo de pagos y créditos.

Este módulo gestiona:
- Wallet por usuario con cargos/abonos atómicos y ledger de movimientos
- Pagos de créditos con liquidación exactamente-una-vez vía webhook

Estructura:
- enums: PaymentStatus, CreditTxType
- models: Wallet, Payment, CreditTransaction
- repositories: acceso a datos con UPDATE condicionales
- services: WalletService (ledger) y PaymentService (liquidación)
- facades: checkout y webhooks (orquestación, sin commit)
- routes: /api/payment y /api/credits

Fecha: 17/10/2026
"""

__all__: list[str] = []
