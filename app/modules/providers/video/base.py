# -*- coding: utf-8 -*-
"""
app/modules/providers/video/base.py

Contrato de proveedores de generación de video.

Capacidad obligatoria: generate(params). get_status(job_id) y cancel(job_id)
son opcionales; supports_cancel indica si el proveedor acepta cancelar
upstream. Todas devuelven la respuesta normalizada de BaseProvider con
data = {video_id, video_url, status, duration}.

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from app.shared.core.http_retry_utils import RetryExhaustedError
from app.shared.utils.http_exceptions import ProviderNotImplementedError, ValidationError
from app.modules.providers.base import BaseProvider
from app.modules.videos.enums import VideoJobStatus

logger = logging.getLogger(__name__)

MAX_PROMPT_LENGTH = 2000
MIN_DURATION_SECONDS = 1
MAX_DURATION_SECONDS = 60
ALLOWED_ASPECT_RATIOS = ("16:9", "9:16", "1:1")

# Estados upstream (en minúsculas) -> estado del job
DEFAULT_STATUS_MAP: dict[str, VideoJobStatus] = {
    "pending": VideoJobStatus.PROCESSING,
    "queued": VideoJobStatus.PROCESSING,
    "waiting": VideoJobStatus.PROCESSING,
    "processing": VideoJobStatus.PROCESSING,
    "running": VideoJobStatus.PROCESSING,
    "in_progress": VideoJobStatus.PROCESSING,
    "completed": VideoJobStatus.COMPLETED,
    "complete": VideoJobStatus.COMPLETED,
    "succeeded": VideoJobStatus.COMPLETED,
    "success": VideoJobStatus.COMPLETED,
    "done": VideoJobStatus.COMPLETED,
    "failed": VideoJobStatus.FAILED,
    "error": VideoJobStatus.FAILED,
    "cancelled": VideoJobStatus.CANCELLED,
    "canceled": VideoJobStatus.CANCELLED,
}

UPSTREAM_ERRORS = (RetryExhaustedError, httpx.HTTPError)


def validate_video_params(params: Mapping[str, Any]) -> None:
    """Reglas comunes a todos los proveedores (prompt, duración, aspect ratio)."""
    errors: list[str] = []
    fields: list[str] = []

    prompt = params.get("prompt")
    if prompt is not None and (not isinstance(prompt, str) or len(prompt) > MAX_PROMPT_LENGTH):
        errors.append(f"prompt must be a string of at most {MAX_PROMPT_LENGTH} characters")
        fields.append("prompt")

    duration = params.get("duration")
    if duration is not None:
        if (
            isinstance(duration, bool)
            or not isinstance(duration, (int, float))
            or not MIN_DURATION_SECONDS <= duration <= MAX_DURATION_SECONDS
        ):
            errors.append(
                f"duration must be between {MIN_DURATION_SECONDS} and {MAX_DURATION_SECONDS} seconds"
            )
            fields.append("duration")

    aspect_ratio = params.get("aspect_ratio")
    if aspect_ratio is not None and aspect_ratio not in ALLOWED_ASPECT_RATIOS:
        errors.append(f"aspect_ratio must be one of: {', '.join(ALLOWED_ASPECT_RATIOS)}")
        fields.append("aspect_ratio")

    if errors:
        raise ValidationError("; ".join(errors), fields=fields)


class VideoProvider(BaseProvider):
    """Base de proveedores de video."""

    required_fields: tuple[str, ...] = ()
    supports_cancel: bool = False
    status_map: Mapping[str, VideoJobStatus] = DEFAULT_STATUS_MAP

    # Rutas de la respuesta cruda -> campos normalizados
    response_mapping: Mapping[str, str] = {
        "video_id": "id",
        "video_url": "url",
        "status": "status",
        "duration": "duration",
    }

    # -----------------------------------------------------------
    # Capacidades
    # -----------------------------------------------------------
    async def generate(self, params: Mapping[str, Any]) -> dict[str, Any]:
        raise ProviderNotImplementedError(
            f"{type(self).__name__}.generate() must be implemented by a concrete provider"
        )

    async def get_status(self, job_id: str) -> dict[str, Any]:
        raise ProviderNotImplementedError(f"{self.name} does not support status polling")

    async def cancel(self, job_id: str) -> dict[str, Any]:
        raise ProviderNotImplementedError(f"{self.name} does not support cancellation")

    # -----------------------------------------------------------
    # Validación
    # -----------------------------------------------------------
    def validate_input(self, params: Any) -> None:
        """Campos requeridos del proveedor + reglas comunes; sin red."""
        self.validate_required(params, self.required_fields)
        validate_video_params(params)

    # -----------------------------------------------------------
    # Estado
    # -----------------------------------------------------------
    def map_status(self, upstream_status: Any) -> Optional[VideoJobStatus]:
        """Traduce el estado del proveedor; None si no es reconocible."""
        if upstream_status is None:
            return None
        return self.status_map.get(str(upstream_status).strip().lower())

    # -----------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------
    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

    async def _call(
        self,
        method: str,
        path: str,
        *,
        label: str,
        mapping: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Request + normalización; los fallos upstream se devuelven normalizados."""
        kwargs.setdefault("headers", self.auth_headers())
        try:
            raw = await self.request(method, path, label=label, **kwargs)
        except UPSTREAM_ERRORS as exc:
            return self.normalize_error(exc)
        return self.normalize_response(raw, mapping)


__all__ = [
    "ALLOWED_ASPECT_RATIOS",
    "VideoProvider",
    "validate_video_params",
]

# Fin del archivo app/modules/providers/video/base.py
