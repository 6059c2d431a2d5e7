# -*- coding: utf-8 -*-
"""
app/shared/config/__init__.py

Punto único de acceso a la configuración:
    from app.shared.config import get_settings, get_payments_settings
"""

from .config_loader import get_settings
from .logging_config import setup_logging
from .settings_base import BaseAppSettings
from .settings_credits import CreditsSettings, get_credits_settings
from .settings_payments import PaymentsSettings, get_payments_settings
from .settings_providers import ProvidersSettings, get_providers_settings

__all__ = [
    "BaseAppSettings",
    "CreditsSettings",
    "PaymentsSettings",
    "ProvidersSettings",
    "get_settings",
    "get_credits_settings",
    "get_payments_settings",
    "get_providers_settings",
    "setup_logging",
]
# Fin del archivo app/shared/config/__init__.py
