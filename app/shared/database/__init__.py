# -*- coding: utf-8 -*-
"""
app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.
"""

from __future__ import annotations

from .base import Base, BigIntId, NAMING_CONVENTION, JSONType, as_db_enum
from .database import (
    SessionLocal,
    check_database_health,
    configure_engine,
    create_all_tables,
    dispose_engine,
    get_async_session,
    get_engine,
    session_scope,
)
from .repository import BaseRepository

__all__ = [
    "Base",
    "BaseRepository",
    "BigIntId",
    "JSONType",
    "NAMING_CONVENTION",
    "SessionLocal",
    "as_db_enum",
    "check_database_health",
    "configure_engine",
    "create_all_tables",
    "dispose_engine",
    "get_async_session",
    "get_engine",
    "session_scope",
]

# Fin del archivo app/shared/database/__init__.py
