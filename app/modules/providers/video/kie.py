# -*- coding: utf-8 -*-
"""
app/modules/providers/video/kie.py

Proveedor Kie.ai (modelos Veo servidos por Kie).

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .base import VideoProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "veo3.1-fast"
DEFAULT_DURATION = 5
DEFAULT_ASPECT_RATIO = "16:9"


class KieProvider(VideoProvider):
    provider_name = "kie"
    required_fields = ("prompt",)
    supports_cancel = True

    def build_payload(self, params: Mapping[str, Any]) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "prompt": params["prompt"],
            "model": params.get("model") or DEFAULT_MODEL,
            "duration": params.get("duration") or DEFAULT_DURATION,
            "aspectRatio": params.get("aspect_ratio") or DEFAULT_ASPECT_RATIO,
        }
        if params.get("seed") is not None:
            payload["seed"] = params["seed"]
        if params.get("style"):
            payload["style"] = params["style"]
        if params.get("negative_prompt"):
            payload["negativePrompt"] = params["negative_prompt"]
        return payload

    async def generate(self, params: Mapping[str, Any]) -> dict[str, Any]:
        self.validate_input(params)
        logger.info("Starting Kie video generation")
        return await self._call(
            "POST",
            "/generate",
            label="Kie video generation",
            mapping=self.response_mapping,
            json=self.build_payload(params),
        )

    async def get_status(self, job_id: str) -> dict[str, Any]:
        return await self._call(
            "GET",
            f"/status/{job_id}",
            label="Kie video status",
            mapping=self.response_mapping,
        )

    async def cancel(self, job_id: str) -> dict[str, Any]:
        result = await self._call("POST", f"/cancel/{job_id}", label="Kie cancel generation")
        if result["success"]:
            result["data"] = {"video_id": job_id, "cancelled": True}
        return result


__all__ = ["KieProvider"]

# Fin del archivo app/modules/providers/video/kie.py
