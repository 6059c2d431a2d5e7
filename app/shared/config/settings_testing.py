# -*- coding: utf-8 -*-
"""
app/shared/config/settings_testing.py

Configuración de la suite de pruebas: SQLite en memoria (aiosqlite),
secreto JWT fijo y logs a WARNING para no ensuciar la salida de pytest.

Fecha: 17/10/2026
"""

from typing import Literal

from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings

TESTING_JWT_SECRET = "testing-secret-key-with-at-least-32-chars"


class EnvTestingSettings(BaseAppSettings):
    python_env: Literal["development", "test", "production"] = "test"

    db_url: str = "sqlite+aiosqlite:///:memory:"
    jwt_secret_key: SecretStr = SecretStr(TESTING_JWT_SECRET)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_format: Literal["json", "pretty", "plain"] = "pretty"

    model_config = SettingsConfigDict(env_file=".env.test", env_file_encoding="utf-8", extra="ignore")


__all__ = ["EnvTestingSettings", "TESTING_JWT_SECRET"]
# Fin del archivo app/shared/config/settings_testing.py
