# -*- coding: utf-8 -*-
"""
app/modules/providers/__init__.py

Capa de proveedores externos: contrato base, registro por familia y las
implementaciones de video (HeyGen, Veo3, Kie) y pagos (Stripe).
"""

from .base import BaseProvider, get_nested_value
from .registry import ProviderRegistry, normalize_provider_name


def register_builtin_providers() -> None:
    """Registra los proveedores incluidos; se llama en el arranque de la app."""
    from .payment.factory import register_builtin_payment_providers
    from .video.factory import register_builtin_video_providers

    register_builtin_video_providers()
    register_builtin_payment_providers()


__all__ = [
    "BaseProvider",
    "ProviderRegistry",
    "get_nested_value",
    "normalize_provider_name",
    "register_builtin_providers",
]
