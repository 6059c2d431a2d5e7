# -*- coding: utf-8 -*-
"""
app/shared/config/settings_prod.py

Configuración de producción: solo variables de entorno (sin .env),
logs JSON a nivel INFO y un pool de conexiones más amplio.

Fecha: 17/10/2026
"""

import logging
from typing import Literal

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings

logger = logging.getLogger(__name__)


class ProdSettings(BaseAppSettings):
    python_env: Literal["development", "test", "production"] = "production"

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "pretty", "plain"] = "json"

    db_pool_size: int = 10
    db_max_overflow: int = 10

    # Los secretos llegan por el entorno del contenedor
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    def _security_checks(self) -> None:
        super()._security_checks()
        if self.get_cors_origins() == ["*"]:
            logger.warning("CORS_ORIGINS=* in production; restrict it to the frontend origin")


__all__ = ["ProdSettings"]
# Fin del archivo app/shared/config/settings_prod.py
