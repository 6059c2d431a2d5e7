# -*- coding: utf-8 -*-
"""
app/modules/videos/routes/videos.py

Rutas de jobs de generación de video.

Endpoints (prefijo /api/videos):
- POST   ""                cobra, crea el job y lo envía al proveedor (202)
- GET    ""                lista paginada con filtros service/status
- GET    /{video_id}       estado (refresca jobs PROCESSING)
- GET    /{video_id}/download
- DELETE /{video_id}       cancela un job PROCESSING

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.database import get_async_session
from app.shared.utils.base_models import ApiResponse, PagePagination, ok
from app.shared.utils.http_exceptions import UpstreamProviderError
from app.modules.auth.dependencies import get_current_user_id
from app.modules.videos.dependencies import get_video_job_service
from app.modules.videos.enums import VideoJobStatus, VideoService
from app.modules.videos.schemas import (
    CreateVideoRequest,
    VideoCancelled,
    VideoDownload,
    VideoJobAccepted,
    VideoList,
    VideoOut,
)
from app.modules.videos.services import VideoJobService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/videos", tags=["videos"])


@router.post(
    "",
    response_model=ApiResponse[VideoJobAccepted],
    status_code=status.HTTP_202_ACCEPTED,
)
async def create_video(
    payload: CreateVideoRequest,
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    service: VideoJobService = Depends(get_video_job_service),
):
    try:
        job = await service.create_job(
            session, user_id=user_id, service=payload.service, params=payload.params
        )
    except UpstreamProviderError:
        # Persistir FAILED + reembolso antes de responder 502
        await session.commit()
        raise
    accepted = VideoJobAccepted(video_id=job.id, status=job.status, service=job.service)
    await session.commit()
    return ok(accepted, "Video generation started")


@router.get("", response_model=ApiResponse[VideoList])
async def list_videos(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    service_filter: Optional[VideoService] = Query(None, alias="service"),
    status_filter: Optional[VideoJobStatus] = Query(None, alias="status"),
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    service: VideoJobService = Depends(get_video_job_service),
):
    items, total = await service.list_jobs(
        session, user_id, page=page, limit=limit, service=service_filter, status=status_filter
    )
    return ok(
        VideoList(
            videos=[VideoOut.model_validate(v) for v in items],
            pagination=PagePagination.build(page=page, limit=limit, total=total),
        )
    )


@router.get("/{video_id}", response_model=ApiResponse[VideoOut])
async def get_video(
    video_id: int,
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    service: VideoJobService = Depends(get_video_job_service),
):
    job = await service.get_job(session, user_id=user_id, video_id=video_id)
    view = VideoOut.model_validate(job)
    await session.commit()
    return ok(view)


@router.get("/{video_id}/download", response_model=ApiResponse[VideoDownload])
async def download_video(
    video_id: int,
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    service: VideoJobService = Depends(get_video_job_service),
):
    url = await service.get_download_url(session, user_id=user_id, video_id=video_id)
    await session.commit()
    return ok(VideoDownload(video_id=video_id, download_url=url))


@router.delete("/{video_id}", response_model=ApiResponse[VideoCancelled])
async def cancel_video(
    video_id: int,
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    service: VideoJobService = Depends(get_video_job_service),
):
    job = await service.cancel_job(session, user_id=user_id, video_id=video_id)
    cancelled = VideoCancelled(video_id=job.id, status=job.status)
    await session.commit()
    return ok(cancelled, "Video generation cancelled")


__all__ = ["router"]

# Fin del archivo app/modules/videos/routes/videos.py
