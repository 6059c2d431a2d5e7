# -*- coding: utf-8 -*-
"""
app/shared/utils/http_exceptions.py

Excepciones de dominio de la API.

Cada clase fija su código HTTP y un identificador estable `error`; el
manejador registrado en app.shared.middleware.exception_handler las traduce a
    {"success": false, "error": ..., "message": ..., "data"?: ...}

Fecha: 17/10/2026
"""

from __future__ import annotations

from typing import Any, Iterable, Optional


class AppError(Exception):
    """Base de los errores que la API responde como JSON estructurado."""

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(
        self,
        message: str,
        *,
        data: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.data = data
        self.headers = headers

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": False,
            "error": self.error,
            "message": self.message,
        }
        if self.data is not None:
            payload["data"] = self.data
        return payload


class ValidationError(AppError):
    """400 - Entrada inválida; enumera todos los campos con problema."""

    status_code = 400
    error = "Validation Error"

    def __init__(self, message: str, *, fields: Iterable[str] = (), **kwargs: Any) -> None:
        self.fields = list(fields)
        data = kwargs.pop("data", None)
        if data is None and self.fields:
            data = {"fields": self.fields}
        super().__init__(message, data=data, **kwargs)


class PaymentLimitError(ValidationError):
    """400 - El monto calculado excede el máximo permitido."""

    error = "Payment amount exceeds limit"


class NotFoundError(AppError):
    """404 - Recurso inexistente."""

    status_code = 404
    error = "Not Found"


class WalletNotFoundError(NotFoundError):
    error = "Wallet not found"

    def __init__(self, user_id: int) -> None:
        super().__init__(f"No wallet exists for user {user_id}", data={"user_id": user_id})
        self.user_id = user_id


class PaymentNotFoundError(NotFoundError):
    error = "Payment not found"


class VideoNotFoundError(NotFoundError):
    error = "Video not found"


class InsufficientCreditsError(AppError):
    """402 - Saldo insuficiente; resultado de negocio definitivo, no se reintenta."""

    status_code = 402
    error = "Insufficient credits"

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        # Con lecturas concurrentes el saldo leído puede ya cubrir el cargo
        self.shortage = max(required - available, 1)
        super().__init__(
            f"You need {required} credits but only have {available}",
            data={
                "required": required,
                "available": available,
                "shortage": self.shortage,
            },
        )


class UnauthorizedError(AppError):
    """401 - Autenticación requerida o credenciales inválidas."""

    status_code = 401
    error = "Authentication required"

    def __init__(self, message: str = "Authentication required", **kwargs: Any) -> None:
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(message, **kwargs)


class ForbiddenError(AppError):
    """403 - Usuario autenticado sin acceso al recurso."""

    status_code = 403
    error = "Forbidden"


class ProviderUnsupportedError(AppError):
    """400 - Nombre de proveedor no registrado."""

    status_code = 400
    error = "Unsupported provider"

    def __init__(self, message: str, *, available: Iterable[str]) -> None:
        self.available = list(available)
        super().__init__(message, data={"available": self.available})


class ProviderNotImplementedError(NotImplementedError):
    """Capacidad abstracta invocada sobre la base de un proveedor."""


class UpstreamProviderError(AppError):
    """502 - Falla de un servicio externo tras agotar reintentos."""

    status_code = 502
    error = "Upstream provider error"

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        upstream_status: Optional[int] = None,
        code: Optional[str] = None,
    ) -> None:
        self.provider = provider
        self.upstream_status = upstream_status
        self.code = code
        data: dict[str, Any] = {"provider": provider}
        if upstream_status is not None:
            data["upstream_status"] = upstream_status
        if code:
            data["code"] = code
        super().__init__(message, data=data)


class WebhookSignatureError(AppError):
    """400 - Firma de webhook ausente o inválida; no hay cambio de estado."""

    status_code = 400
    error = "Webhook signature verification failed"


class PaymentStateError(AppError):
    """409 - Transición de pago no permitida desde el estado actual."""

    status_code = 409
    error = "Invalid payment state"


class VideoStateError(AppError):
    """400 - Operación no permitida para el estado actual del job de video."""

    status_code = 400
    error = "Invalid video state"


__all__ = [
    "AppError",
    "ValidationError",
    "PaymentLimitError",
    "NotFoundError",
    "WalletNotFoundError",
    "PaymentNotFoundError",
    "VideoNotFoundError",
    "InsufficientCreditsError",
    "UnauthorizedError",
    "ForbiddenError",
    "ProviderUnsupportedError",
    "ProviderNotImplementedError",
    "UpstreamProviderError",
    "WebhookSignatureError",
    "PaymentStateError",
    "VideoStateError",
]
# Fin del archivo app/shared/utils/http_exceptions.py
