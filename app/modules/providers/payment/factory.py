# -*- coding: utf-8 -*-
"""
app/modules/providers/payment/factory.py

Fábrica de proveedores de pago. Los controladores de liquidación dependen
solo de PaymentProvider; el gateway concreto sale de PAYMENT_PROVIDER.

Fecha: 17/10/2026
"""

from __future__ import annotations

from typing import Any, Optional

from app.shared.config import get_payments_settings
from app.modules.providers.registry import ProviderRegistry

from .base import PaymentProvider
from .stripe_provider import StripeProvider

BUILTIN_PAYMENT_PROVIDERS = {
    "stripe": StripeProvider,
}


def _resolve_config(name: str) -> dict[str, Any]:
    settings = get_payments_settings()
    if name == "stripe":
        return {
            "api_key": settings.stripe_secret_key,
            "webhook_secret": settings.stripe_webhook_secret,
            "timeout": settings.stripe_timeout,
        }
    return {}


payment_providers: ProviderRegistry[PaymentProvider] = ProviderRegistry(
    "payment", config_resolver=_resolve_config
)


def register_builtin_payment_providers(registry: ProviderRegistry = payment_providers) -> None:
    """Registra los integrados sin pisar registros existentes (idempotente)."""
    for name, constructor in BUILTIN_PAYMENT_PROVIDERS.items():
        if not registry.is_supported(name):
            registry.register(name, constructor)


def get_payment_provider(name: Optional[str] = None, **kwargs: Any) -> PaymentProvider:
    """Proveedor `name` o, por defecto, el configurado en PAYMENT_PROVIDER."""
    return payment_providers.create(name or get_payments_settings().payment_provider, **kwargs)


__all__ = [
    "BUILTIN_PAYMENT_PROVIDERS",
    "get_payment_provider",
    "payment_providers",
    "register_builtin_payment_providers",
]

# Fin del archivo app/modules/providers/payment/factory.py
