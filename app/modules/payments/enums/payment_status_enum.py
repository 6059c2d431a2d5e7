# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/payment_status_enum.py

Enum de estados del pago.

Transiciones válidas:
    PENDING -> COMPLETED | FAILED
    COMPLETED -> REFUNDED (operación fuera de banda)

Fecha: 17/10/2026
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum


class PaymentStatus(StrEnum):
    """Estado del pago en el ciclo de vida con el proveedor."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"

    __db_enum_name__ = "payment_status_enum"

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
        return self is not PaymentStatus.PENDING


__all__ = ["PaymentStatus"]

# Fin del archivo app/modules/payments/enums/payment_status_enum.py
