# -*- coding: utf-8 -*-
"""
app/main.py

Punto de entrada del backend.

- Carga .env antes de leer configuración.
- Lifespan: registra proveedores integrados y, al apagar, libera el
  cliente HTTP compartido y el engine dentro de SHUTDOWN_TIMEOUT_SECONDS.
- Middlewares: CORS, errores JSON y logging de peticiones.
- Routers: /health, / y /api/*.

Fecha: 17/10/2026
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que lea settings
# En DEV: override=True para que .env mande sobre variables del entorno
# En PROD: override=False para respetar variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_ENVIRONMENT = os.getenv("PYTHON_ENV", "development").strip().strip('"').strip("'").lower()
_override_env = _ENVIRONMENT != "production"
load_dotenv(dotenv_path=_ENV_PATH, override=_override_env)

import anyio
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.shared.config import get_settings, setup_logging
from app.shared.core.http_client_cache import close_http_client
from app.shared.database.database import dispose_engine
from app.shared.middleware import (
    JSONExceptionMiddleware,
    RequestLoggingMiddleware,
    register_exception_handlers,
)
from app.modules.providers import register_builtin_providers
from app.routes import router as main_router

settings = get_settings()
setup_logging(settings.log_level, settings.log_format, sql_echo=settings.db_echo_sql)
logger = logging.getLogger(__name__)

logger.info("[dotenv] Loaded %s (override=%s, PYTHON_ENV=%s)", _ENV_PATH, _override_env, _ENVIRONMENT)


# ═══════════════════════════════════════════════════════════════════════════════
# LIFESPAN
# ═══════════════════════════════════════════════════════════════════════════════
async def _shutdown_resources() -> None:
    await close_http_client()
    await dispose_engine()


@asynccontextmanager
async def lifespan(app: FastAPI):
    register_builtin_providers()
    logger.info(
        "%s v%s started (env=%s)",
        settings.app_name,
        settings.app_version,
        settings.python_env,
    )
    try:
        yield
    finally:
        # Shielded: el apagado no debe abortarse a mitad por cancelación
        with anyio.CancelScope(shield=True):
            try:
                with anyio.fail_after(settings.shutdown_timeout_seconds):
                    await _shutdown_resources()
            except TimeoutError:
                logger.error(
                    "Shutdown cleanup exceeded %.1fs; resources may not be fully released",
                    settings.shutdown_timeout_seconds,
                )
        logger.info("%s stopped", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)


# ═══════════════════════════════════════════════════════════════════════════════
# MIDDLEWARES Y MANEJO DE ERRORES
# El orden real de ejecución en Starlette es inverso al registro: CORS se
# registra al final para ejecutarse primero (outermost).
# ═══════════════════════════════════════════════════════════════════════════════
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(JSONExceptionMiddleware)

_cors_origins = settings.get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    # Con wildcard el navegador rechaza credenciales
    allow_credentials=_cors_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)
logger.info("CORS enabled for origins: %s", _cors_origins)

register_exception_handlers(app)

app.include_router(main_router)


if __name__ == "__main__":
    enable_reload = settings.is_dev and os.getenv("DISABLE_RELOAD", "").lower() not in ("true", "1", "yes")
    logger.info("Starting server with reload=%s", enable_reload)
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=enable_reload,
    )

# Fin del archivo app/main.py
