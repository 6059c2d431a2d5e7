# -*- coding: utf-8 -*-
"""
app/modules/providers/registry.py

Registro nombre -> constructor de proveedores.

Hay una instancia por familia (video, pagos). Los built-in se registran
en el arranque de la app; register/unregister quedan disponibles para
extensiones y tests. La mutación está protegida con un lock, pero el
registro no está pensado para escrituras concurrentes: solo las búsquedas
son seguras desde cualquier request.

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from app.shared.utils.http_exceptions import ProviderUnsupportedError, ValidationError

from .base import BaseProvider

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=BaseProvider)

ProviderConstructor = Callable[..., P]
ConfigResolver = Callable[[str], dict[str, Any]]


def normalize_provider_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(
            "Provider name is required and must be a string", fields=["provider"]
        )
    return name.strip().lower()


class ProviderRegistry(Generic[P]):
    """Fábrica de proveedores de una familia ("video" o "payment")."""

    def __init__(self, kind: str, config_resolver: Optional[ConfigResolver] = None):
        self.kind = kind
        self._config_resolver = config_resolver
        self._lock = threading.Lock()
        self._providers: Dict[str, ProviderConstructor] = {}

    # -----------------------------------------------------------
    # Registro
    # -----------------------------------------------------------
    def register(self, name: str, constructor: ProviderConstructor) -> None:
        if not callable(constructor):
            raise ValidationError(
                "Provider constructor is required and must be callable", fields=["constructor"]
            )
        key = normalize_provider_name(name)
        with self._lock:
            if key in self._providers:
                logger.warning("%s provider '%s' already registered. Overwriting", self.kind, key)
            self._providers[key] = constructor
        logger.info("Registered %s provider: %s", self.kind, key)

    def unregister(self, name: str) -> bool:
        if not isinstance(name, str) or not name.strip():
            return False
        key = name.strip().lower()
        with self._lock:
            removed = self._providers.pop(key, None) is not None
        if removed:
            logger.info("Unregistered %s provider: %s", self.kind, key)
        return removed

    def clear(self) -> None:
        with self._lock:
            self._providers.clear()

    # -----------------------------------------------------------
    # Consultas
    # -----------------------------------------------------------
    def is_supported(self, name: Any) -> bool:
        if not isinstance(name, str) or not name.strip():
            return False
        return name.strip().lower() in self._providers

    def list_available(self) -> list[str]:
        return list(self._providers)

    # -----------------------------------------------------------
    # Creación
    # -----------------------------------------------------------
    def create(self, name: str, **kwargs: Any) -> P:
        """
        Instancia el proveedor `name` (case/whitespace-insensitive).

        Raises:
            ProviderUnsupportedError: si no está registrado
        """
        key = normalize_provider_name(name)
        constructor = self._providers.get(key)
        if constructor is None:
            available = self.list_available()
            raise ProviderUnsupportedError(
                f"Unsupported {self.kind} provider: '{name}'. "
                f"Available providers: {', '.join(available) or 'none'}",
                available=available,
            )

        if "config" not in kwargs and self._config_resolver is not None:
            kwargs["config"] = self._config_resolver(key)
        logger.debug("Creating %s provider instance: %s", self.kind, key)
        return constructor(name=key, **kwargs)

    def get_provider_info(self, name: str, **kwargs: Any) -> dict[str, Any]:
        key = normalize_provider_name(name)
        constructor = self._providers.get(key)
        if constructor is None:
            raise ProviderUnsupportedError(
                f"Provider '{name}' is not supported",
                available=self.list_available(),
            )
        instance = self.create(key, **kwargs)
        return {
            "name": key,
            "class_name": getattr(constructor, "__name__", type(instance).__name__),
            "provider": instance.name,
            "config": instance.public_config(),
        }

    def create_with_context(self, name: str, **kwargs: Any) -> dict[str, Any]:
        provider = self.create(name, **kwargs)
        return {
            "provider": provider,
            "info": self.get_provider_info(name, **kwargs),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }


__all__ = ["ProviderRegistry", "normalize_provider_name"]

# Fin del archivo app/modules/providers/registry.py
