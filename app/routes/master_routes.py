# -*- coding: utf-8 -*-
"""
app/routes/master_routes.py

Router maestro: monta los routers de los módulos bajo /api.

Fecha: 17/10/2026
"""
from __future__ import annotations

import logging

from fastapi import APIRouter

from app.modules.payments.routes import router as payments_router
from app.modules.videos.routes import router as videos_router

logger = logging.getLogger(__name__)

api = APIRouter(prefix="/api")

_loaded: list[str] = []  # trazabilidad/debug


def _include(target: APIRouter, router: APIRouter, name: str) -> None:
    """Incluye un router en la capa dada y registra trazabilidad en logs."""
    target.include_router(router)
    _loaded.append(f"{target.prefix or '/'}:{name}")
    logger.debug(
        "Router '%s' mounted at prefix '%s' (router.prefix='%s')",
        name,
        target.prefix or "/",
        getattr(router, "prefix", ""),
    )


_include(api, payments_router, "payments")
_include(api, videos_router, "videos")


def loaded_routers() -> list[str]:
    return list(_loaded)


__all__ = ["api", "loaded_routers"]

# Fin del archivo app/routes/master_routes.py
