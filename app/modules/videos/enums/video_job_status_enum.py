# -*- coding: utf-8 -*-
"""
app/modules/videos/enums/video_job_status_enum.py

Estados de un job de generación de video.

    PENDING -> PROCESSING -> COMPLETED | FAILED | CANCELLED

Los estados terminales no se sobrescriben con sondeos posteriores.

Fecha: 17/10/2026
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum


class VideoJobStatus(StrEnum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    __db_enum_name__ = "video_job_status_enum"

    @classmethod
    def _missing_(cls, value):
        # Acepta el valor sin distinguir mayúsculas (p.ej. ?status=completed)
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None

    @classmethod
    def as_db_enum(cls) -> SAEnum:
        return as_db_enum(cls, name=cls.__db_enum_name__)

    @property
    def is_terminal(self) -> bool:
        return self in (VideoJobStatus.COMPLETED, VideoJobStatus.FAILED, VideoJobStatus.CANCELLED)


__all__ = ["VideoJobStatus"]

# Fin del archivo app/modules/videos/enums/video_job_status_enum.py
