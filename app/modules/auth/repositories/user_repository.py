# -*- coding: utf-8 -*-
"""
app/modules/auth/repositories/user_repository.py

Repositorio de acceso a datos para usuarios.

Fecha: 17/10/2026
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.models.user_models import User
from app.shared.database.repository import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self):
        super().__init__(User)

    async def get_by_email(self, session: AsyncSession, email: str) -> Optional[User]:
        """Busca por email normalizado en minúsculas."""
        norm_email = (email or "").strip().lower()
        if not norm_email:
            return None
        stmt = select(User).where(func.lower(User.email) == norm_email)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_by_google_id(self, session: AsyncSession, google_id: str) -> Optional[User]:
        stmt = select(User).where(User.google_id == google_id)
        result = await session.execute(stmt)
        return result.scalars().first()

# Fin del archivo app/modules/auth/repositories/user_repository.py
