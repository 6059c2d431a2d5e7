# -*- coding: utf-8 -*-
"""
app/shared/core/http_retry_utils.py

Reintentos con backoff exponencial para llamadas a proveedores externos.

Política (configurable vía ProvidersSettings):
    - hasta max_attempts intentos (default 3)
    - espera inicial 1000 ms, multiplicada por backoff_multiplier (2) en
      cada reintento, con tope max_delay_ms (10000 ms)

Solo se reintenta lo transitorio: conexión rechazada, timeout, HTTP 5xx
y HTTP 429. Cualquier otro error se propaga en el primer intento. Al agotar
los intentos se lanza RetryExhaustedError con la etiqueta de la operación,
el número de intentos y el último error.

Uso:
    from app.shared.core.http_retry_utils import execute_request

    async with httpx.AsyncClient(timeout=60) as client:
        body = await execute_request(
            client, "POST", url, label="HeyGen video generation", json=payload
        )

Fecha: 17/10/2026
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import httpx

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = 429


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    initial_delay_ms: int = 1000
    backoff_multiplier: float = 2.0
    max_delay_ms: int = 10000

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts debe ser >= 1, recibido: {self.max_attempts}")
        if self.initial_delay_ms < 0 or self.max_delay_ms < 0:
            raise ValueError("Los delays no pueden ser negativos")
        if self.backoff_multiplier < 1:
            raise ValueError(f"backoff_multiplier debe ser >= 1, recibido: {self.backoff_multiplier}")

    @classmethod
    def from_settings(cls, settings: Any = None) -> "RetryPolicy":
        if settings is None:
            from app.shared.config.settings_providers import get_providers_settings
            settings = get_providers_settings()
        return cls(
            max_attempts=settings.retry_max_attempts,
            initial_delay_ms=settings.retry_initial_delay_ms,
            backoff_multiplier=settings.retry_backoff_multiplier,
            max_delay_ms=settings.retry_max_delay_ms,
        )


class RetryExhaustedError(Exception):
    """Todos los intentos fallaron con errores reintentables."""

    def __init__(self, label: str, attempts: int, last_error: BaseException) -> None:
        self.label = label
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"{label} failed after {attempts} attempts: {error_message(last_error)}")

    @property
    def upstream_status(self) -> Optional[int]:
        return error_status(self.last_error)


def error_status(exc: BaseException) -> Optional[int]:
    """Código HTTP asociado al error, si existe (httpx o SDKs con http_status)."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    for attr in ("http_status", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    return None


def error_message(exc: BaseException) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code}: {exc.response.reason_phrase}"
    return str(exc) or type(exc).__name__


def is_retryable_error(exc: BaseException) -> bool:
    """
    True si el error es transitorio: conexión rechazada, timeout,
    HTTP 5xx o HTTP 429.
    """
    if isinstance(exc, (httpx.ConnectError, httpx.TimeoutException)):
        return True
    if isinstance(exc, (ConnectionRefusedError, TimeoutError)):
        return True
    status = error_status(exc)
    if status is not None:
        return status >= 500 or status == RETRYABLE_STATUS
    return False


async def retry_with_backoff(
    func: Callable,
    *args,
    policy: Optional[RetryPolicy] = None,
    label: str = "request",
    is_retryable: Callable[[BaseException], bool] = is_retryable_error,
    **kwargs,
) -> Any:
    """
    Ejecuta `func(*args, **kwargs)` con reintentos y backoff exponencial.

    Args:
        func: Función async a ejecutar
        policy: Política de reintentos (default: la de ProvidersSettings)
        label: Nombre de la operación para logs y mensaje de error
        is_retryable: Clasificador de errores transitorios

    Returns:
        Lo que devuelva func en el primer intento exitoso

    Raises:
        RetryExhaustedError: Si todos los intentos fallan con errores reintentables
        Exception: El error original si no es reintentable
    """
    policy = policy or RetryPolicy.from_settings()
    delay_ms: float = policy.initial_delay_ms
    last_exception: Optional[BaseException] = None

    for attempt in range(1, policy.max_attempts + 1):
        try:
            logger.info("%s: intento %d/%d", label, attempt, policy.max_attempts)
            result = await func(*args, **kwargs)
            if attempt > 1:
                logger.info("%s: éxito tras %d intentos", label, attempt)
            return result
        except Exception as e:
            if not is_retryable(e):
                logger.error("%s: error no reintentable (%s)", label, error_message(e))
                raise
            last_exception = e
            if attempt < policy.max_attempts:
                logger.warning(
                    "%s: %s en intento %d/%d, reintentando en %.0f ms",
                    label,
                    error_message(e),
                    attempt,
                    policy.max_attempts,
                    delay_ms,
                )
                await asyncio.sleep(delay_ms / 1000)
                delay_ms = min(delay_ms * policy.backoff_multiplier, policy.max_delay_ms)

    assert last_exception is not None
    logger.error(
        "%s: reintentos agotados tras %d intentos (%s)",
        label,
        policy.max_attempts,
        error_message(last_exception),
    )
    raise RetryExhaustedError(label, policy.max_attempts, last_exception) from last_exception


async def execute_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    label: str,
    policy: Optional[RetryPolicy] = None,
    **kwargs,
) -> Any:
    """
    Envía un request con reintentos y devuelve el body decodificado.

    Un status >= 400 se convierte en httpx.HTTPStatusError antes de
    clasificarse, por lo que 5xx/429 se reintentan y el resto se propaga.
    """

    async def _send() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        response.raise_for_status()
        return response

    response = await retry_with_backoff(_send, policy=policy, label=label)
    if not response.content:
        return {}
    if "json" in response.headers.get("content-type", ""):
        return response.json()
    return {"raw": response.text}


__all__ = [
    "RetryPolicy",
    "RetryExhaustedError",
    "error_message",
    "error_status",
    "execute_request",
    "is_retryable_error",
    "retry_with_backoff",
]
# Fin del archivo app/shared/core/http_retry_utils.py
