# -*- coding: utf-8 -*-
"""
app/modules/payments/models/wallet_models.py

Modelo ORM para la tabla wallets.

Reglas de negocio:
- Una wallet por usuario (UNIQUE user_id).
- current_balance nunca es negativo (CHECK + UPDATE condicional).
- total_credits_used solo crece.
- Solo se muta vía WalletService (deduct / add / reset), siempre con
  UPDATE atómico en SQL, nunca leyendo y escribiendo desde Python.

Fecha: 17/10/2026
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, BigIntId


class Wallet(Base):
    """Billetera de créditos de un usuario."""

    __tablename__ = "wallets"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        doc="Dueño de la billetera (1:1).",
    )

    current_balance: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=100,
        server_default="100",
    )

    total_credits_used: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        CheckConstraint("current_balance >= 0", name="current_balance_non_negative"),
        CheckConstraint("total_credits_used >= 0", name="total_credits_used_non_negative"),
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<Wallet id={self.id} user_id={self.user_id} balance={self.current_balance}>"


__all__ = ["Wallet"]

# Fin del archivo app/modules/payments/models/wallet_models.py
