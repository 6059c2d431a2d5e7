# -*- coding: utf-8 -*-
"""
app/modules/providers/video/veo3.py

Proveedor Google Veo 3: texto (y opcionalmente imagen) a video.

La generación es una operación de larga duración: generate() devuelve el
nombre de la operación como video_id, y get_status()/cancel() trabajan
sobre ese nombre.

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from app.shared.utils.http_exceptions import ValidationError
from app.modules.providers.base import get_nested_value
from app.modules.videos.enums import VideoJobStatus

from .base import VideoProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "veo-3"
DEFAULT_DURATION = 5
DEFAULT_ASPECT_RATIO = "16:9"


class Veo3Provider(VideoProvider):
    provider_name = "veo3"
    required_fields = ("prompt",)
    supports_cancel = True
    response_mapping = {
        "video_id": "name",
        "video_url": "video.uri",
        "status": "state",
        "duration": "video.duration",
    }

    @property
    def project_id(self) -> str:
        return str(self.config.get("project_id") or "")

    def auth_headers(self) -> dict[str, str]:
        headers = super().auth_headers()
        if self.project_id:
            headers["x-goog-user-project"] = self.project_id
        return headers

    def public_config(self) -> dict[str, Any]:
        return {**super().public_config(), "project_id": self.project_id or None}

    def build_payload(self, params: Mapping[str, Any]) -> dict[str, Any]:
        prompt: dict[str, Any] = {"text": params["prompt"]}
        if params.get("negative_prompt"):
            prompt["negativeText"] = params["negative_prompt"]
        if params.get("reference_image"):
            prompt["referenceImage"] = {"imageUri": params["reference_image"]}

        generation_config: dict[str, Any] = {
            "duration": params.get("duration") or DEFAULT_DURATION,
            "aspectRatio": params.get("aspect_ratio") or DEFAULT_ASPECT_RATIO,
            "model": params.get("model") or DEFAULT_MODEL,
        }
        if params.get("style"):
            generation_config["style"] = params["style"]
        if params.get("seed") is not None:
            generation_config["seed"] = params["seed"]
        if params.get("image_influence"):
            generation_config["imageInfluenceStrength"] = params["image_influence"]

        return {"prompt": prompt, "generationConfig": generation_config}

    async def generate(self, params: Mapping[str, Any]) -> dict[str, Any]:
        self.validate_input(params)
        model = params.get("model") or DEFAULT_MODEL
        logger.info("Starting Veo 3 video generation (model=%s)", model)
        return await self._call(
            "POST",
            f"/models/{model}:generate",
            label="Veo 3 video generation",
            mapping=self.response_mapping,
            json=self.build_payload(params),
        )

    async def generate_from_image(self, params: Mapping[str, Any]) -> dict[str, Any]:
        self.validate_required(params, ("prompt", "image_url"))
        return await self.generate({**params, "reference_image": params["image_url"]})

    async def get_status(self, job_id: str) -> dict[str, Any]:
        result = await self._call("GET", f"/{job_id}", label="Veo 3 operation status")
        if not result["success"]:
            return result

        raw = result["data"]
        if raw.get("done"):
            state = "failed" if raw.get("error") else "completed"
        else:
            state = "processing"
        result["data"] = {
            "video_id": raw.get("name") or job_id,
            "video_url": get_nested_value(raw, "response.video.uri")
            or get_nested_value(raw, "video.uri"),
            "status": state,
            "duration": get_nested_value(raw, "response.video.duration"),
        }
        if state == "failed":
            result["data"]["error_message"] = get_nested_value(raw, "error.message")
        return result

    async def cancel(self, job_id: str) -> dict[str, Any]:
        result = await self._call("POST", f"/{job_id}:cancel", label="Veo 3 cancel operation")
        if result["success"]:
            result["data"] = {"video_id": job_id, "cancelled": True}
        return result

    async def get_model_info(self, model: str = DEFAULT_MODEL) -> dict[str, Any]:
        return await self._call("GET", f"/models/{model}", label="Veo 3 model info")

    def map_status(self, upstream_status: Any):
        if isinstance(upstream_status, bool):
            return VideoJobStatus.COMPLETED if upstream_status else VideoJobStatus.PROCESSING
        return super().map_status(upstream_status)


__all__ = ["Veo3Provider"]

# Fin del archivo app/modules/providers/video/veo3.py
