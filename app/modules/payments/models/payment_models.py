# -*- coding: utf-8 -*-
"""
app/modules/payments/models/payment_models.py

Modelo ORM para la tabla payments (un registro por intento de checkout).

- amount: NUMERIC(10,2) en unidades mayores de la moneda (dólares).
  La conversión a centavos ocurre solo en el adaptador del proveedor.
- credits_awarded: fijado al crear el checkout, inmutable.
- gateway_session_id / gateway_payment_id: UNIQUE; son las claves de
  idempotencia frente a webhooks duplicados.

Fecha: 17/10/2026
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, BigIntId, JSONType
from app.modules.payments.enums import PaymentStatus


class Payment(Base):
    """Pago registrado en el sistema."""

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        doc="Monto cobrado en unidades mayores de la moneda.",
    )

    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD", server_default="USD")

    credits_awarded: Mapped[int] = mapped_column(Integer, nullable=False)

    status: Mapped[PaymentStatus] = mapped_column(
        PaymentStatus.as_db_enum(),
        nullable=False,
        default=PaymentStatus.PENDING,
        index=True,
    )

    payment_gateway: Mapped[str] = mapped_column(String(32), nullable=False, default="stripe")

    gateway_session_id: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)

    gateway_payment_id: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)

    # Bolsa JSON opaca: descripción, detalle de error, auditoría
    payment_metadata: Mapped[Optional[dict[str, Any]]] = mapped_column(
        "metadata",
        JSONType,
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_payments_user_id_created_at", "user_id", "created_at"),
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return (
            f"<Payment id={self.id} user_id={self.user_id} status={self.status} "
            f"credits={self.credits_awarded}>"
        )


__all__ = ["Payment"]

# Fin del archivo app/modules/payments/models/payment_models.py
