# -*- coding: utf-8 -*-
"""
app/modules/videos/repositories/video_log_repository.py

Repositorio de video_logs.

update_if_status() aplica cambios solo si el job sigue en el estado
esperado; así un sondeo tardío no pisa un estado terminal ya escrito
por otra petición (p.ej. una cancelación).

Fecha: 17/10/2026
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.videos.enums import VideoJobStatus, VideoService
from app.modules.videos.models.video_log_models import VideoLog


class VideoLogRepository(BaseRepository[VideoLog]):
    def __init__(self):
        super().__init__(VideoLog)

    async def get_for_user(self, session: AsyncSession, video_id: int, user_id: int) -> Optional[VideoLog]:
        stmt = (
            select(VideoLog)
            .where(VideoLog.id == video_id, VideoLog.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def update_if_status(
        self,
        session: AsyncSession,
        video_id: int,
        *,
        expected: VideoJobStatus,
        **values: Any,
    ) -> bool:
        stmt = (
            update(VideoLog)
            .where(VideoLog.id == video_id, VideoLog.status == expected)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount == 1

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: int,
        *,
        service: Optional[VideoService] = None,
        status: Optional[VideoJobStatus] = None,
        limit: int,
        offset: int = 0,
    ) -> Sequence[VideoLog]:
        return await self.page(
            session,
            *self._criteria(user_id, service, status),
            order_by=(VideoLog.created_at.desc(), VideoLog.id.desc()),
            limit=limit,
            offset=offset,
        )

    async def count_for_user(
        self,
        session: AsyncSession,
        user_id: int,
        *,
        service: Optional[VideoService] = None,
        status: Optional[VideoJobStatus] = None,
    ) -> int:
        return await self.count(session, *self._criteria(user_id, service, status))

    @staticmethod
    def _criteria(
        user_id: int, service: Optional[VideoService], status: Optional[VideoJobStatus]
    ) -> list:
        criteria = [VideoLog.user_id == user_id]
        if service is not None:
            criteria.append(VideoLog.service == service)
        if status is not None:
            criteria.append(VideoLog.status == status)
        return criteria

# Fin del archivo app/modules/videos/repositories/video_log_repository.py
