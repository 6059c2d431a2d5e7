# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/__init__.py

Ensamblador de rutas REST del módulo Payments.

Incluye:
- /api/payment/*   checkout, vistas de retorno, webhook e historial
- /api/credits/*   saldo, cargos/abonos e historial del ledger

Fecha: 17/10/2026
"""

from fastapi import APIRouter

from .credits import router as credits_router
from .payments import router as payments_router

router = APIRouter()

router.include_router(payments_router)
router.include_router(credits_router)

__all__ = ["router"]

# Fin del archivo app/modules/payments/routes/__init__.py
