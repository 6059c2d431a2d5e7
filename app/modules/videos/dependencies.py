# -*- coding: utf-8 -*-
"""
app/modules/videos/dependencies.py

Dependencias FastAPI del módulo Videos.

Fecha: 17/10/2026
"""

from __future__ import annotations

from fastapi import Depends

from app.modules.payments.dependencies import get_wallet_service
from app.modules.payments.services import WalletService
from app.modules.videos.repositories import VideoLogRepository
from app.modules.videos.services import VideoJobService


def get_video_job_service(
    wallet_service: WalletService = Depends(get_wallet_service),
) -> VideoJobService:
    return VideoJobService(video_repo=VideoLogRepository(), wallet_service=wallet_service)


__all__ = ["get_video_job_service"]

# Fin del archivo app/modules/videos/dependencies.py
