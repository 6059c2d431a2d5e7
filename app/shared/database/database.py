# -*- coding: utf-8 -*-
"""
app/shared/database/database.py

SQLAlchemy async: engine único de proceso, creado de forma perezosa.

Provee:
- get_engine() / configure_engine(url)
- SessionLocal() (async_sessionmaker)
- Dependencia FastAPI: get_async_session
- context manager: session_scope()
- check_database_health()
- dispose_engine(): drena el pool en el shutdown

Notas:
- PostgreSQL (asyncpg) en runtime; SQLite (aiosqlite) en tests.
- El engine no se crea al importar: la URL se resuelve en el primer uso.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.shared.database.base import Base

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def _engine_kwargs(url: str) -> dict[str, Any]:
    from app.shared.config import get_settings
    settings = get_settings()

    kwargs: dict[str, Any] = {"echo": settings.db_echo_sql}
    if url.startswith("sqlite"):
        if ":memory:" in url:
            # Una sola conexión compartida para que todas las sesiones vean el mismo esquema
            kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )
    return kwargs


def configure_engine(url: Optional[str] = None, **overrides: Any) -> AsyncEngine:
    """
    (Re)crea el engine global. Sin `url` usa settings.database_url.
    El engine anterior debe haberse liberado con dispose_engine().
    """
    global _engine, _session_factory
    if url is None:
        from app.shared.config import get_settings
        url = get_settings().database_url

    kwargs = _engine_kwargs(url)
    kwargs.update(overrides)
    _engine = create_async_engine(url, **kwargs)
    _session_factory = async_sessionmaker(
        bind=_engine,
        expire_on_commit=False,
        class_=AsyncSession,
        autoflush=False,
    )
    logger.info("[DB] Engine configurado (%s)", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_engine() -> AsyncEngine:
    if _engine is None:
        configure_engine()
    assert _engine is not None
    return _engine


def SessionLocal() -> AsyncSession:
    """Nueva sesión ligada al engine global."""
    if _session_factory is None:
        configure_engine()
    assert _session_factory is not None
    return _session_factory()


# ── Dependencias FastAPI
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
        except SQLAlchemyError:
            # rollback para liberar cualquier transacción/lock
            await session.rollback()
            raise


# ── Context manager reutilizable en scripts/tests
@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


# ── Health check
async def check_database_health(timeout_s: float = 3.0, sql: str = "SELECT 1") -> bool:
    """
    Verifica conectividad a la base de datos.

    Returns:
        True si la conexión es exitosa, False en caso contrario
    """
    try:
        async with asyncio.timeout(timeout_s):
            async with get_engine().connect() as conn:
                await conn.execute(text(sql))
        return True
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        logger.warning("[DB] Health check falló: %s", e)
        return False


async def create_all_tables() -> None:
    """Crea el esquema desde los modelos (tests y desarrollo local)."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Cierra todas las conexiones del pool (idempotente)."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.info("[DB] Engine liberado")
    _engine = None
    _session_factory = None


__all__ = [
    "Base",
    "SessionLocal",
    "check_database_health",
    "configure_engine",
    "create_all_tables",
    "dispose_engine",
    "get_async_session",
    "get_engine",
    "session_scope",
]
# Fin del archivo app/shared/database/database.py
