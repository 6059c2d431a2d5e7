# -*- coding: utf-8 -*-
"""
app/modules/payments/dependencies.py

Dependencias FastAPI del módulo Payments: construcción de servicios y
proveedor de pagos. Los tests sobreescriben get_payment_provider_dep para
usar un gateway falso.

Fecha: 17/10/2026
"""

from __future__ import annotations

from fastapi import Depends

from app.modules.payments.repositories import (
    CreditTransactionRepository,
    PaymentRepository,
    WalletRepository,
)
from app.modules.payments.services import PaymentService, WalletService
from app.modules.providers.payment import PaymentProvider, get_payment_provider


def build_wallet_service() -> WalletService:
    return WalletService(
        wallet_repo=WalletRepository(),
        credit_repo=CreditTransactionRepository(),
    )


def build_payment_service(wallet_service: WalletService | None = None) -> PaymentService:
    return PaymentService(
        payment_repo=PaymentRepository(),
        wallet_service=wallet_service or build_wallet_service(),
    )


def get_wallet_service() -> WalletService:
    return build_wallet_service()


def get_payment_service(
    wallet_service: WalletService = Depends(get_wallet_service),
) -> PaymentService:
    return build_payment_service(wallet_service)


def get_payment_provider_dep() -> PaymentProvider:
    return get_payment_provider()


__all__ = [
    "build_payment_service",
    "build_wallet_service",
    "get_payment_provider_dep",
    "get_payment_service",
    "get_wallet_service",
]

# Fin del archivo app/modules/payments/dependencies.py
