# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/credits.py

Rutas del saldo de créditos del usuario autenticado.

Endpoints (prefijo /api/credits):
- GET  ""         saldo actual y total consumido
- POST /deduct    cargo manual
- POST /add       abono manual
- GET  /history   movimientos del ledger, más recientes primero

Fecha: 17/10/2026
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config import get_credits_settings
from app.shared.database.database import get_async_session
from app.shared.utils.base_models import ApiResponse, OffsetPagination, ok
from app.shared.utils.http_exceptions import ValidationError
from app.modules.auth.dependencies import get_current_user_id
from app.modules.payments.dependencies import get_wallet_service
from app.modules.payments.schemas import (
    AddResult,
    CreditHistory,
    CreditOperationRequest,
    CreditsBalance,
    CreditTransactionOut,
    DeductResult,
)
from app.modules.payments.services import WalletService

router = APIRouter(prefix="/credits", tags=["credits"])


def _check_operation_cap(amount: int) -> None:
    cap = get_credits_settings().max_credits_per_operation
    if amount > cap:
        raise ValidationError(
            f"amount must not exceed {cap} credits per operation", fields=["amount"]
        )


@router.get("", response_model=ApiResponse[CreditsBalance])
async def get_credits(
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    wallet_service: WalletService = Depends(get_wallet_service),
):
    wallet = await wallet_service.get_wallet(session, user_id)
    return ok(
        CreditsBalance(
            current_balance=wallet.current_balance,
            total_credits_used=wallet.total_credits_used,
        )
    )


@router.post("/deduct", response_model=ApiResponse[DeductResult])
async def deduct_credits(
    payload: CreditOperationRequest,
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    wallet_service: WalletService = Depends(get_wallet_service),
):
    _check_operation_cap(payload.amount)
    change = await wallet_service.deduct(
        session,
        user_id,
        payload.amount,
        operation_code="manual_deduct",
        description=payload.reason,
    )
    await session.commit()
    return ok(
        DeductResult(
            previous_balance=change.previous_balance,
            amount_deducted=payload.amount,
            new_balance=change.new_balance,
            total_credits_used=change.total_credits_used,
            reason=payload.reason,
            timestamp=change.timestamp,
        ),
        f"Successfully deducted {payload.amount} credits",
    )


@router.post("/add", response_model=ApiResponse[AddResult])
async def add_credits(
    payload: CreditOperationRequest,
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    wallet_service: WalletService = Depends(get_wallet_service),
):
    _check_operation_cap(payload.amount)
    change = await wallet_service.add(
        session,
        user_id,
        payload.amount,
        operation_code="manual_add",
        description=payload.reason,
    )
    await session.commit()
    return ok(
        AddResult(
            previous_balance=change.previous_balance,
            amount_added=payload.amount,
            new_balance=change.new_balance,
            total_credits_used=change.total_credits_used,
            reason=payload.reason,
            timestamp=change.timestamp,
        ),
        f"Successfully added {payload.amount} credits",
    )


@router.get("/history", response_model=ApiResponse[CreditHistory])
async def credits_history(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    wallet_service: WalletService = Depends(get_wallet_service),
):
    items, total = await wallet_service.history(session, user_id, limit=limit, offset=offset)
    return ok(
        CreditHistory(
            transactions=[CreditTransactionOut.model_validate(tx) for tx in items],
            pagination=OffsetPagination(limit=limit, offset=offset, total=total),
        )
    )


__all__ = ["router"]

# Fin del archivo app/modules/payments/routes/credits.py
