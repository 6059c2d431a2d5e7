# -*- coding: utf-8 -*-
"""
app/shared/config/settings_providers.py

Configuración de proveedores externos de generación de video
(HeyGen, Veo3, Kie.ai) y de la política de reintentos HTTP compartida.

Fecha: 17/10/2026
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProvidersSettings(BaseSettings):
    """Credenciales, endpoints y timeouts por proveedor."""

    # =========================================================================
    # POLÍTICA DE REINTENTOS
    # =========================================================================

    retry_max_attempts: int = Field(default=3, ge=1, description="Intentos máximos por llamada")
    retry_initial_delay_ms: int = Field(default=1000, ge=0, description="Espera inicial entre intentos (ms)")
    retry_backoff_multiplier: float = Field(default=2.0, ge=1.0, description="Multiplicador del backoff")
    retry_max_delay_ms: int = Field(default=10000, ge=0, description="Tope de espera entre intentos (ms)")

    # =========================================================================
    # HEYGEN
    # =========================================================================

    heygen_api_key: Optional[str] = Field(default=None, description="API key de HeyGen")
    heygen_api_endpoint: str = Field(default="https://api.heygen.com/v2")
    heygen_timeout: int = Field(default=60, description="Timeout en segundos")

    # =========================================================================
    # VEO3 (Google)
    # =========================================================================

    veo3_api_key: Optional[str] = Field(default=None, description="Bearer token de Google")
    veo3_api_endpoint: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    veo3_project_id: Optional[str] = Field(default=None, description="Proyecto de facturación de Google")
    veo3_timeout: int = Field(default=60, description="Timeout en segundos")

    # =========================================================================
    # KIE.AI
    # =========================================================================

    kie_api_key: Optional[str] = Field(default=None, description="API key de Kie.ai")
    kie_api_endpoint: str = Field(default="https://api.kie.ai/v1")
    kie_timeout: int = Field(default=30, description="Timeout en segundos")

    def provider_config(self, name: str) -> dict[str, Any]:
        """Bloque de configuración que recibe el constructor del proveedor `name`."""
        name = name.strip().lower()
        config: dict[str, Any] = {
            "api_key": getattr(self, f"{name}_api_key", None),
            "endpoint": getattr(self, f"{name}_api_endpoint", None),
            "timeout": getattr(self, f"{name}_timeout", 30),
        }
        if name == "veo3":
            config["project_id"] = self.veo3_project_id
        return config

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


_providers_settings: Optional[ProvidersSettings] = None


def get_providers_settings() -> ProvidersSettings:
    """Obtiene la instancia global de configuración de proveedores."""
    global _providers_settings
    if _providers_settings is None:
        _providers_settings = ProvidersSettings()
    return _providers_settings


__all__ = ["ProvidersSettings", "get_providers_settings"]
# Fin del archivo app/shared/config/settings_providers.py
