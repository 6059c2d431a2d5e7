# -*- coding: utf-8 -*-
"""
app/shared/config/settings_credits.py

Parámetros del ledger de créditos: saldo inicial, tope por operación
y costo en créditos de cada proveedor de video.

Fecha: 17/10/2026
"""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CreditsSettings(BaseSettings):
    """Configuración de créditos."""

    initial_credits: int = Field(
        default=100,
        ge=0,
        validation_alias=AliasChoices("INITIAL_CREDITS", "DEFAULT_CREDITS"),
        description="Saldo de una wallet nueva y valor al que regresa con reset",
    )

    max_credits_per_operation: int = Field(
        default=1_000_000,
        ge=1,
        validation_alias="MAX_CREDITS_PER_OPERATION",
        description="Tope de sanidad por operación manual de abono/cargo",
    )

    min_credits_for_video: int = Field(
        default=1,
        ge=0,
        validation_alias="MIN_CREDITS_FOR_VIDEO",
        description="Saldo mínimo para iniciar una generación",
    )

    # JSON en env, ej. VIDEO_COSTS='{"heygen": 10, "veo3": 15, "kie": 5}'
    video_costs: dict[str, int] = Field(
        default_factory=lambda: {"heygen": 10, "veo3": 15, "kie": 5},
        validation_alias="VIDEO_COSTS",
    )

    def cost_for(self, service: str) -> int:
        """Créditos que consume una generación con `service`."""
        return int(self.video_costs.get(service.strip().lower(), self.min_credits_for_video))

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


_credits_settings: Optional[CreditsSettings] = None


def get_credits_settings() -> CreditsSettings:
    """Obtiene la instancia global de configuración de créditos."""
    global _credits_settings
    if _credits_settings is None:
        _credits_settings = CreditsSettings()
    return _credits_settings


__all__ = ["CreditsSettings", "get_credits_settings"]
# Fin del archivo app/shared/config/settings_credits.py
