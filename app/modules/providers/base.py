# -*- coding: utf-8 -*-
"""
app/modules/providers/base.py

Contrato común de los proveedores externos (video y pagos).

Cada proveedor se construye con un nombre y un bloque de configuración
(api_key, endpoint, timeout) y ofrece:
    - validate_required(): pre-validación que nombra TODOS los campos faltantes
    - request(): llamada HTTP con la política de reintentos compartida
    - normalize_response() / normalize_error(): forma única de respuesta

    éxito: {"success": True,  "provider", "timestamp", "data": {...}}
    fallo: {"success": False, "provider", "timestamp", "error": {"message", "code", "status"?}}

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

import httpx

from app.shared.core.http_client_cache import get_http_client
from app.shared.core.http_retry_utils import (
    RetryExhaustedError,
    RetryPolicy,
    error_message,
    error_status,
    execute_request,
)
from app.shared.utils.http_exceptions import ValidationError

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def get_nested_value(obj: Any, path: str) -> Any:
    """Lee 'a.b.c' de dicts anidados; None si algún tramo falta."""
    current = obj
    for key in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _is_missing(value: Any) -> bool:
    # Cadenas vacías o solo espacios cuentan como ausentes
    return value is None or (isinstance(value, str) and not value.strip())


class BaseProvider:
    """
    Base de proveedores. No se usa directamente: las capacidades
    (generate, create_checkout_session, ...) viven en las subclases.
    """

    #: Nombre por defecto con el que se registra el proveedor
    provider_name: str = "base"

    def __init__(
        self,
        name: Optional[str] = None,
        config: Optional[Mapping[str, Any]] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        retry_policy: Optional[RetryPolicy] = None,
        include_raw: Optional[bool] = None,
    ) -> None:
        self.name = (name or self.provider_name).lower()
        self.config: dict[str, Any] = dict(config or {})
        self._client = client
        self._retry_policy = retry_policy
        if include_raw is None:
            from app.shared.config import get_settings
            include_raw = get_settings().is_dev
        self.include_raw = include_raw

    # -----------------------------------------------------------
    # Configuración
    # -----------------------------------------------------------
    @property
    def api_key(self) -> Optional[str]:
        return self.config.get("api_key")

    @property
    def endpoint(self) -> str:
        return str(self.config.get("endpoint") or "").rstrip("/")

    @property
    def timeout(self) -> float:
        return float(self.config.get("timeout") or 30)

    def public_config(self) -> dict[str, Any]:
        """Configuración sin secretos (para get_provider_info)."""
        return {"endpoint": self.endpoint or None, "timeout": self.timeout}

    # -----------------------------------------------------------
    # Validación
    # -----------------------------------------------------------
    def validate_required(self, params: Any, required: Iterable[str]) -> None:
        if not isinstance(params, Mapping):
            raise ValidationError("Invalid parameters: params must be an object", fields=["params"])
        missing = [field for field in required if _is_missing(params.get(field))]
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}",
                fields=missing,
            )

    # -----------------------------------------------------------
    # HTTP
    # -----------------------------------------------------------
    async def request(
        self,
        method: str,
        path: str,
        *,
        label: str,
        **kwargs: Any,
    ) -> Any:
        """Request al endpoint del proveedor con reintentos y timeout propio."""
        client = self._client or await get_http_client()
        url = path if path.startswith("http") else f"{self.endpoint}/{path.lstrip('/')}"
        kwargs.setdefault("timeout", self.timeout)
        logger.debug("%s %s %s", self.name, method, url)
        return await execute_request(
            client,
            method,
            url,
            label=label,
            policy=self._retry_policy,
            **kwargs,
        )

    # -----------------------------------------------------------
    # Normalización
    # -----------------------------------------------------------
    def normalize_response(
        self,
        raw: Any,
        mapping: Optional[Mapping[str, str]] = None,
    ) -> dict[str, Any]:
        """
        Construye la respuesta de éxito. `mapping` traduce campos
        normalizados a rutas punteadas dentro de la respuesta cruda;
        sin mapping, `data` es la respuesta tal cual.
        """
        if mapping is None:
            data = dict(raw) if isinstance(raw, Mapping) else {"value": raw}
        else:
            data = {field: get_nested_value(raw, path) for field, path in mapping.items()}

        normalized: dict[str, Any] = {
            "success": True,
            "provider": self.name,
            "timestamp": _utc_timestamp(),
            "data": data,
        }
        if self.include_raw:
            normalized["raw_response"] = raw
        return normalized

    def normalize_error(self, exc: BaseException) -> dict[str, Any]:
        if isinstance(exc, RetryExhaustedError):
            code = "RETRY_EXHAUSTED"
        elif isinstance(exc, httpx.HTTPStatusError):
            code = "HTTP_ERROR"
        elif isinstance(exc, httpx.RequestError):
            code = "NETWORK_ERROR"
        else:
            code = getattr(exc, "code", None) or "UNKNOWN_ERROR"

        error: dict[str, Any] = {"message": str(exc) or error_message(exc), "code": code}
        status = exc.upstream_status if isinstance(exc, RetryExhaustedError) else error_status(exc)
        if status is not None:
            error["status"] = status

        logger.error("%s error normalized: %s", self.name, error["message"])
        return {
            "success": False,
            "provider": self.name,
            "timestamp": _utc_timestamp(),
            "error": error,
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"


__all__ = ["BaseProvider", "get_nested_value"]

# Fin del archivo app/modules/providers/base.py
