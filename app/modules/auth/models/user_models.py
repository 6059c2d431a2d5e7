# -*- coding: utf-8 -*-
"""
app/modules/auth/models/user_models.py

Modelo principal de usuarios.

La identidad la provee un proveedor OAuth externo (Google): el registro
se crea con la primera aserción verificada y se actualiza al refrescar
el perfil. El código de pagos nunca lo modifica.

Wallet, Payment y VideoLog apuntan a users.id con ON DELETE CASCADE.

Fecha: 17/10/2026
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, BigIntId


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    # Identidad externa (OAuth) y tokens cacheados
    google_id: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)
    access_token: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    refresh_token: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"


__all__ = ["User"]
# Fin del archivo app/modules/auth/models/user_models.py
