# -*- coding: utf-8 -*-
"""
app/routes/__init__.py

Ensamblador principal de ruteadores de la API.

- /health y / sin prefijo
- /api/... routers de módulos (master_routes.py)

Fecha: 17/10/2026
"""

from fastapi import APIRouter

from .health_routes import router as health_router
from .master_routes import api

router = APIRouter()

router.include_router(health_router)
router.include_router(api)

__all__ = ["router"]

# Fin del archivo app/routes/__init__.py
