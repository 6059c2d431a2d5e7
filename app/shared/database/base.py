# -*- coding: utf-8 -*-
"""
app/shared/database/base.py

Piezas comunes de los modelos ORM (usuarios, wallets, pagos, videos):
- Base: DeclarativeBase con nombres de constraints deterministas
- NAMING_CONVENTION: plantillas de nombre para ix/uq/ck/fk/pk
- as_db_enum: helper para mapear enums Python a columnas de texto validadas
- JSONType: JSON portable (JSONB en PostgreSQL)
- BigIntId: tipo de PK/FK numérica portable

Fecha: 17/10/2026
"""

from __future__ import annotations

from enum import Enum
from typing import Type

from sqlalchemy import JSON, BigInteger, Enum as SAEnum, Integer, MetaData
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase

# ===== NAMING CONVENTION =====
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


# ===== BASE DECLARATIVA =====
class Base(DeclarativeBase):
    """
    Base de todos los modelos; comparte un único MetaData.
    """
    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    # Recupera created_at/updated_at generados en servidor tras cada flush
    # (en async no hay lazy-load implícito de atributos expirados)
    __mapper_args__ = {"eager_defaults": True}


# JSONB en PostgreSQL, JSON genérico en el resto (SQLite en tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")

# BIGINT en PostgreSQL; INTEGER en SQLite para que la PK sea autoincremental
BigIntId = BigInteger().with_variant(Integer, "sqlite")


# ===== HELPER GENÉRICO PARA ENUMS =====
def as_db_enum(enum_cls: Type[Enum], name: str | None = None) -> SAEnum:
    """
    Devuelve un tipo Enum de SQLAlchemy persistido como VARCHAR + CHECK.

    Uso típico:

        class Payment(Base):
            status: Mapped[PaymentStatus] = mapped_column(
                as_db_enum(PaymentStatus, name="payment_status_enum"),
                nullable=False,
            )

    Se guarda el `.value` del enum (no el nombre del miembro).
    """
    enum_name = name or getattr(enum_cls, "__db_enum_name__", enum_cls.__name__.lower())

    def _values(_: object) -> list[str]:
        return [e.value for e in enum_cls]  # type: ignore[arg-type]

    return SAEnum(
        enum_cls,
        name=enum_name,
        native_enum=False,
        create_constraint=True,
        validate_strings=True,
        values_callable=_values,
        length=32,
    )


__all__ = ["Base", "BigIntId", "NAMING_CONVENTION", "JSONType", "as_db_enum"]
# Fin del archivo app/shared/database/base.py
