# -*- coding: utf-8 -*-
"""
app/shared/config/config_loader.py

Punto único de acceso a la configuración. Elige la clase de settings
según PYTHON_ENV y la conserva durante toda la vida del proceso.

Fecha: 17/10/2026
"""

from functools import lru_cache
import os
from typing import Dict, Type

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_testing import EnvTestingSettings
from .settings_prod import ProdSettings

_SETTINGS_BY_ENV: Dict[str, Type[BaseAppSettings]] = {
    "development": DevSettings,
    "test": EnvTestingSettings,
    "production": ProdSettings,
}


def settings_class_for(env: str) -> Type[BaseAppSettings]:
    """Clase de settings para un PYTHON_ENV; valores desconocidos caen en desarrollo."""
    return _SETTINGS_BY_ENV.get(env.strip().lower(), DevSettings)


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Instancia cacheada de settings con las validaciones de seguridad aplicadas.

    Raises:
        ValueError: si la configuración no es segura para el entorno
    """
    settings = settings_class_for(os.getenv("PYTHON_ENV", "development"))()
    settings._security_checks()
    return settings


__all__ = ["get_settings", "settings_class_for"]
# Fin del archivo app/shared/config/config_loader.py
