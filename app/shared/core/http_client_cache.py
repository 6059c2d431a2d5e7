# -*- coding: utf-8 -*-
"""
app/shared/core/http_client_cache.py

Cliente HTTP global compartido por los proveedores externos.

Se crea de forma perezosa y se cierra en el shutdown de la app. Los
reintentos NO se delegan al transporte de httpx: la política vive en
http_retry_utils para que el conteo de intentos sea exacto.

Fecha: 17/10/2026
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

_http_client: Optional[httpx.AsyncClient] = None
_http_client_lock = asyncio.Lock()


async def get_http_client() -> httpx.AsyncClient:
    """Obtiene el cliente HTTP global. Si no existe, lo crea."""
    global _http_client
    if _http_client is not None and not _http_client.is_closed:
        return _http_client

    async with _http_client_lock:
        if _http_client is None or _http_client.is_closed:
            from app.shared.config import get_settings
            settings = get_settings()

            _http_client = httpx.AsyncClient(
                headers={"User-Agent": f"{settings.app_name}/{settings.app_version}"},
                timeout=httpx.Timeout(30.0, connect=10.0),
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            )
            logger.info("Cliente HTTP global inicializado")
    return _http_client


async def close_http_client() -> None:
    """Cierra el cliente global (idempotente)."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
        logger.info("Cliente HTTP global cerrado")


__all__ = ["get_http_client", "close_http_client"]
# Fin del archivo app/shared/core/http_client_cache.py
