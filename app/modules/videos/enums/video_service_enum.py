# -*- coding: utf-8 -*-
"""
app/modules/videos/enums/video_service_enum.py

Proveedores de generación de video soportados por el esquema.

Fecha: 17/10/2026
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum


class VideoService(StrEnum):
    HEYGEN = "HEYGEN"
    VEO3 = "VEO3"
    KIE = "KIE"

    __db_enum_name__ = "video_service_enum"

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
    def provider_name(self) -> str:
        """Nombre con el que se registra en la fábrica de proveedores."""
        return self.value.lower()

    @classmethod
    def from_provider_name(cls, name: str) -> "VideoService":
        return cls(name.strip().upper())


__all__ = ["VideoService"]

# Fin del archivo app/modules/videos/enums/video_service_enum.py
