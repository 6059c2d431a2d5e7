# -*- coding: utf-8 -*-
"""
app/modules/videos/schemas/video_schemas.py

Contratos de /api/videos.

El servicio se expone con el nombre del proveedor en minúsculas
("heygen", "veo3", "kie"), igual que al crear el job.

Fecha: 17/10/2026
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_serializer

from app.shared.utils.base_models import ApiModel, PagePagination
from app.modules.videos.enums import VideoJobStatus, VideoService


class CreateVideoRequest(ApiModel):
    service: str = Field(min_length=1, description="Proveedor: heygen, veo3 o kie.")
    params: dict[str, Any] = Field(default_factory=dict, description="Parámetros propios del proveedor.")


class VideoJobAccepted(ApiModel):
    video_id: int
    status: VideoJobStatus
    service: VideoService

    @field_serializer("service")
    def _service(self, value: VideoService) -> str:
        return value.provider_name


class VideoOut(ApiModel):
    video_id: int = Field(validation_alias="id")
    service: VideoService
    status: VideoJobStatus
    provider_job_id: Optional[str] = None
    video_url: Optional[str] = None
    duration: Optional[float] = None
    credits_consumed: int
    error_message: Optional[str] = None
    params: Optional[dict[str, Any]] = Field(default=None, validation_alias="request_params")
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None

    @field_serializer("service")
    def _service(self, value: VideoService) -> str:
        return value.provider_name


class VideoList(ApiModel):
    videos: list[VideoOut]
    pagination: PagePagination


class VideoDownload(ApiModel):
    video_id: int
    download_url: str


class VideoCancelled(ApiModel):
    video_id: int
    status: VideoJobStatus


__all__ = [
    "CreateVideoRequest",
    "VideoCancelled",
    "VideoDownload",
    "VideoJobAccepted",
    "VideoList",
    "VideoOut",
]

# Fin del archivo app/modules/videos/schemas/video_schemas.py
