# -*- coding: utf-8 -*-
"""
app/shared/config/settings_dev.py

Configuración de desarrollo local: lee .env, logs DEBUG en texto plano
y trazas de error en las respuestas.

Fecha: 17/10/2026
"""

from typing import Literal

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class DevSettings(BaseAppSettings):
    """Valores por defecto pensados para `uvicorn --reload` en local."""

    python_env: Literal["development", "test", "production"] = "development"

    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"
    log_format: Literal["json", "pretty", "plain"] = "plain"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


__all__ = ["DevSettings"]
# Fin del archivo app/shared/config/settings_dev.py
