# -*- coding: utf-8 -*-
"""
app/modules/providers/video/heygen.py

Proveedor HeyGen: video de avatar con voz a partir de un guion.

Parámetros de generate():
    avatar_id, voice_id, script   (requeridos; script <= 10000 caracteres)
    title, background, dimension, test   (opcionales)

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from app.shared.utils.http_exceptions import ValidationError

from .base import VideoProvider

logger = logging.getLogger(__name__)

MAX_SCRIPT_LENGTH = 10000
DEFAULT_DIMENSION = {"width": 1920, "height": 1080}


class HeyGenProvider(VideoProvider):
    provider_name = "heygen"
    required_fields = ("avatar_id", "voice_id", "script")
    response_mapping = {
        "video_id": "video_id",
        "video_url": "data.video_url",
        "status": "status",
        "duration": "data.duration",
    }

    def auth_headers(self) -> dict[str, str]:
        return {"X-Api-Key": self.api_key or "", "Content-Type": "application/json"}

    def validate_input(self, params: Any) -> None:
        super().validate_input(params)
        script = params["script"]
        if not isinstance(script, str) or len(script) > MAX_SCRIPT_LENGTH:
            raise ValidationError(
                f"Script exceeds maximum length of {MAX_SCRIPT_LENGTH} characters",
                fields=["script"],
            )

    def build_payload(self, params: Mapping[str, Any]) -> dict[str, Any]:
        video_input: dict[str, Any] = {
            "character": {"type": "avatar", "avatar_id": params["avatar_id"]},
            "voice": {"type": "voice", "voice_id": params["voice_id"]},
            "input_text": params["script"],
        }
        if params.get("background"):
            video_input["background"] = params["background"]

        payload: dict[str, Any] = {
            "video_inputs": [video_input],
            "dimension": params.get("dimension") or dict(DEFAULT_DIMENSION),
        }
        if params.get("title"):
            payload["title"] = params["title"]
        if params.get("test"):
            payload["test"] = True
        return payload

    async def generate(self, params: Mapping[str, Any]) -> dict[str, Any]:
        self.validate_input(params)
        logger.info("Starting HeyGen video generation")
        return await self._call(
            "POST",
            "/video/generate",
            label="HeyGen video generation",
            mapping=self.response_mapping,
            json=self.build_payload(params),
        )

    async def get_status(self, job_id: str) -> dict[str, Any]:
        return await self._call(
            "GET",
            f"/video/status/{job_id}",
            label="HeyGen video status",
            mapping=self.response_mapping,
        )

    async def list_avatars(self) -> dict[str, Any]:
        result = await self._call("GET", "/avatars", label="HeyGen list avatars")
        if result["success"]:
            raw = result["data"]
            result["data"] = {"avatars": raw.get("data") or raw.get("avatars") or []}
        return result

    async def list_voices(self) -> dict[str, Any]:
        result = await self._call("GET", "/voices", label="HeyGen list voices")
        if result["success"]:
            raw = result["data"]
            result["data"] = {"voices": raw.get("data") or raw.get("voices") or []}
        return result


__all__ = ["HeyGenProvider"]

# Fin del archivo app/modules/providers/video/heygen.py
