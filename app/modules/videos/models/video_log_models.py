# -*- coding: utf-8 -*-
"""
app/modules/videos/models/video_log_models.py

Modelo ORM para la tabla video_logs: un registro por job de generación.

Reglas:
- credits_consumed se fija al crear el job (costo del proveedor).
- provider_job_id lo asigna el proveedor al aceptar el job.
- Los estados terminales (COMPLETED, FAILED, CANCELLED) no se sobrescriben.

Fecha: 17/10/2026
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, BigIntId, JSONType
from app.modules.videos.enums import VideoJobStatus, VideoService


class VideoLog(Base):
    __tablename__ = "video_logs"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    service: Mapped[VideoService] = mapped_column(VideoService.as_db_enum(), nullable=False)
    status: Mapped[VideoJobStatus] = mapped_column(
        VideoJobStatus.as_db_enum(),
        nullable=False,
        default=VideoJobStatus.PENDING,
        server_default=VideoJobStatus.PENDING.value,
    )

    provider_job_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    request_params: Mapped[Optional[dict[str, Any]]] = mapped_column(JSONType, nullable=True)

    video_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    duration: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    credits_consumed: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("ix_video_logs_user_created", "user_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<VideoLog id={self.id} service={self.service} status={self.status}>"


__all__ = ["VideoLog"]

# Fin del archivo app/modules/videos/models/video_log_models.py
