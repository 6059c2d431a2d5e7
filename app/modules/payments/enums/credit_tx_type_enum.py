# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/credit_tx_type_enum.py

Enum de tipos de movimiento en el ledger de créditos.

Fecha: 17/10/2026
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum


class CreditTxType(StrEnum):
    """Tipo de movimiento en el ledger de créditos."""

    CREDIT = "CREDIT"
    DEBIT = "DEBIT"
    # reset administrativo del saldo
    ADJUSTMENT = "ADJUSTMENT"

    __db_enum_name__ = "credit_tx_type_enum"

    @classmethod
    def as_db_enum(cls) -> SAEnum:
        return as_db_enum(cls, name=cls.__db_enum_name__)


__all__ = ["CreditTxType"]

# Fin del archivo app/modules/payments/enums/credit_tx_type_enum.py
