# -*- coding: utf-8 -*-
"""
app/modules/providers/video/factory.py

Fábrica de proveedores de video.

    provider = video_providers.create("HeyGen ")   # -> HeyGenProvider
    video_providers.list_available()               # ["heygen", "veo3", "kie"]

La configuración de cada proveedor se resuelve desde ProvidersSettings
al momento de crear la instancia.

Fecha: 17/10/2026
"""

from __future__ import annotations

from typing import Any

from app.shared.config import get_providers_settings
from app.modules.providers.registry import ProviderRegistry

from .base import VideoProvider
from .heygen import HeyGenProvider
from .kie import KieProvider
from .veo3 import Veo3Provider

BUILTIN_VIDEO_PROVIDERS = {
    "heygen": HeyGenProvider,
    "veo3": Veo3Provider,
    "kie": KieProvider,
}


def _resolve_config(name: str) -> dict[str, Any]:
    return get_providers_settings().provider_config(name)


video_providers: ProviderRegistry[VideoProvider] = ProviderRegistry(
    "video", config_resolver=_resolve_config
)


def register_builtin_video_providers(registry: ProviderRegistry = video_providers) -> None:
    """Registra los integrados sin pisar registros existentes (idempotente)."""
    for name, constructor in BUILTIN_VIDEO_PROVIDERS.items():
        if not registry.is_supported(name):
            registry.register(name, constructor)


def get_video_provider(name: str, **kwargs: Any) -> VideoProvider:
    return video_providers.create(name, **kwargs)


__all__ = [
    "BUILTIN_VIDEO_PROVIDERS",
    "get_video_provider",
    "register_builtin_video_providers",
    "video_providers",
]

# Fin del archivo app/modules/providers/video/factory.py
