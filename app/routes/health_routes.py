# -*- coding: utf-8 -*-
"""
app/routes/health_routes.py

Endpoints de estado del servicio:
- GET /health  estado básico + conectividad a la base de datos
- GET /        índice de endpoints disponibles

Fecha: 17/10/2026
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from app.shared.config import get_settings
from app.shared.database.database import check_database_health

router = APIRouter(tags=["health"])

API_ENDPOINTS = {
    "health": "/health",
    "credits": "/api/credits",
    "credits_history": "/api/credits/history",
    "payment_checkout": "/api/payment/checkout",
    "payment_webhook": "/api/payment/webhook",
    "payment_history": "/api/payment/history",
    "videos": "/api/videos",
}


@router.get(
    "/health",
    summary="Health check del backend",
    description="Estado básico del servicio con verificación simple de la base de datos.",
)
async def health_check() -> dict:
    settings = get_settings()
    db_ok = await check_database_health(timeout_s=2.0)

    return {
        "status": "OK",
        "message": "Server is running" if db_ok else "Server is running (database unreachable)",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "appName": settings.app_name,
        "version": settings.app_version,
        "environment": settings.python_env,
        "database": "connected" if db_ok else "unreachable",
    }


@router.get("/", summary="Índice de la API")
async def root() -> dict:
    settings = get_settings()
    return {
        "success": True,
        "message": f"{settings.app_name} is running",
        "version": settings.app_version,
        "endpoints": API_ENDPOINTS,
    }

# Fin del archivo app/routes/health_routes.py
