# -*- coding: utf-8 -*-
"""
app/shared/utils/base_models.py

Modelos base Pydantic compartidos por la API.

- ApiModel: JSON en camelCase (alias generados) aceptando también
  snake_case al construir; from_attributes para leer filas ORM.
- ApiResponse[T]: sobre de éxito {success: true, data, message?}.
- OffsetPagination / PagePagination: metadatos de listas.

Fecha: 17/10/2026
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class ApiResponse(ApiModel, Generic[T]):
    success: bool = True
    data: T
    message: Optional[str] = None


class OffsetPagination(ApiModel):
    limit: int = Field(ge=1)
    offset: int = Field(ge=0)
    total: int = Field(ge=0)


class PagePagination(ApiModel):
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total: int = Field(ge=0)
    total_pages: int = Field(ge=0)

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> "PagePagination":
        return cls(page=page, limit=limit, total=total, total_pages=-(-total // limit))


def ok(data: T, message: Optional[str] = None) -> ApiResponse[T]:
    """Atajo para construir el sobre de éxito en las rutas."""
    return ApiResponse(data=data, message=message)


__all__ = ["ApiModel", "ApiResponse", "OffsetPagination", "PagePagination", "ok"]

# Fin del archivo app/shared/utils/base_models.py
