# -*- coding: utf-8 -*-
"""
app/shared/database/repository.py

Repositorio base para operaciones async con SQLAlchemy.

Además del CRUD mínimo ofrece conteo y paginación por criterios, que
usan los listados de pagos, movimientos de créditos y videos.

Fecha: 17/10/2026
"""

from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")  # modelo ORM


class BaseRepository(Generic[T]):
    """Repositorio asincrónico base para CRUD común."""

    def __init__(self, model: Type[T]):
        self.model = model

    # -------------------------------------------------------------
    # CRUD básico
    # -------------------------------------------------------------
    async def get(self, session: AsyncSession, obj_id: Any) -> Optional[T]:
        return await session.get(self.model, obj_id)

    async def create(self, session: AsyncSession, **kwargs) -> T:
        obj = self.model(**kwargs)
        session.add(obj)
        await session.flush()
        return obj

    async def delete(self, session: AsyncSession, obj: T) -> None:
        await session.delete(obj)
        await session.flush()

    # -------------------------------------------------------------
    # Listados
    # -------------------------------------------------------------
    async def count(self, session: AsyncSession, *criteria: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        return int((await session.execute(stmt)).scalar_one())

    async def page(
        self,
        session: AsyncSession,
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
        limit: int,
        offset: int = 0,
    ) -> Sequence[T]:
        stmt = (
            select(self.model)
            .where(*criteria)
            .order_by(*order_by)
            .limit(limit)
            .offset(offset)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

# Fin del archivo app/shared/database/repository.py
