# -*- coding: utf-8 -*-
"""
app/modules/payments/models/credit_transaction_models.py

Ledger de auditoría de créditos (credit_transactions).

Cada mutación de la wallet escribe una fila en la misma transacción que
el UPDATE del saldo, de modo que la suma de credits_delta reproduce el
historial completo del usuario.

Fecha: 17/10/2026
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, BigIntId, JSONType
from app.modules.payments.enums import CreditTxType


class CreditTransaction(Base):
    """
    Movimiento inmutable del ledger de créditos.

    - credits_delta  → +N abono, -N cargo (0 no se registra)
    - balance_after  → saldo de la wallet tras aplicar el movimiento
    - operation_code → origen: manual_add, manual_deduct, payment_settlement,
                       video_generation, video_refund, wallet_reset
    """

    __tablename__ = "credit_transactions"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    tx_type: Mapped[CreditTxType] = mapped_column(CreditTxType.as_db_enum(), nullable=False)
    credits_delta: Mapped[int] = mapped_column(Integer, nullable=False)
    balance_after: Mapped[int] = mapped_column(Integer, nullable=False)

    operation_code: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    payment_id: Mapped[Optional[int]] = mapped_column(
        BigIntId,
        ForeignKey("payments.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    video_id: Mapped[Optional[int]] = mapped_column(BigIntId, nullable=True, index=True)

    tx_metadata: Mapped[Optional[dict[str, Any]]] = mapped_column("metadata", JSONType, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_credit_transactions_user_id_created_at", "user_id", "created_at"),
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return (
            f"<CreditTransaction id={self.id} user_id={self.user_id} "
            f"type={self.tx_type} delta={self.credits_delta}>"
        )


__all__ = ["CreditTransaction"]

# Fin del archivo app/modules/payments/models/credit_transaction_models.py
