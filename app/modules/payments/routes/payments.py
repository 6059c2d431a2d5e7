# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/payments.py

Rutas de compra de créditos.

Endpoints (prefijo /api/payment):
- POST /checkout   inicia el checkout en el gateway
- GET  /success    vista del pago al volver del gateway
- GET  /cancel     acuse de cancelación (sin mutación)
- POST /webhook    webhook firmado del gateway (sin auth de sesión)
- GET  /history    historial paginado + estadísticas

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.database import get_async_session
from app.shared.utils.base_models import ApiResponse, OffsetPagination, ok
from app.modules.auth.dependencies import get_current_user_id
from app.modules.payments.dependencies import get_payment_provider_dep, get_payment_service
from app.modules.payments.enums import PaymentStatus
from app.modules.payments.facades.checkout import start_checkout
from app.modules.payments.facades.webhooks import handle_payment_webhook
from app.modules.payments.schemas import (
    CancelView,
    CheckoutRequest,
    CheckoutResponse,
    PaymentHistory,
    PaymentOut,
    PaymentStatsOut,
    PaymentStatusView,
)
from app.modules.payments.services import PaymentService
from app.modules.providers.payment import PaymentProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payment", tags=["payments"])


@router.post(
    "/checkout",
    response_model=ApiResponse[CheckoutResponse],
    status_code=status.HTTP_200_OK,
)
async def create_checkout(
    payload: CheckoutRequest,
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    payment_service: PaymentService = Depends(get_payment_service),
    provider: PaymentProvider = Depends(get_payment_provider_dep),
):
    result = await start_checkout(
        session,
        user_id=user_id,
        credits=payload.credits,
        payment_service=payment_service,
        provider=provider,
    )
    await session.commit()
    return ok(result, "Checkout session created")


@router.get("/success", response_model=ApiResponse[PaymentStatusView])
async def payment_success(
    session_id: str = Query(..., min_length=1),
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    payment_service: PaymentService = Depends(get_payment_service),
):
    payment = await payment_service.get_for_user_by_session(
        session, gateway_session_id=session_id, user_id=user_id
    )
    view = PaymentStatusView(
        payment_id=payment.id,
        status=payment.status,
        credits_awarded=payment.credits_awarded,
        amount=payment.amount,
        currency=payment.currency,
    )
    return ok(view)


@router.get("/cancel", response_model=ApiResponse[CancelView])
async def payment_cancel(user_id: int = Depends(get_current_user_id)):
    logger.info("Checkout cancelled by user_id=%s", user_id)
    return ok(CancelView(), "Payment was cancelled")


@router.post("/webhook")
async def payment_webhook(
    request: Request,
    session: AsyncSession = Depends(get_async_session),
    payment_service: PaymentService = Depends(get_payment_service),
    provider: PaymentProvider = Depends(get_payment_provider_dep),
):
    # Body crudo: la firma se calcula sobre estos bytes exactos
    raw_body = await request.body()
    result = await handle_payment_webhook(
        session,
        raw_body=raw_body,
        signature=request.headers.get("stripe-signature"),
        provider=provider,
        payment_service=payment_service,
    )
    await session.commit()
    return {"success": True, "message": "Webhook processed successfully", "data": result}


@router.get("/history", response_model=ApiResponse[PaymentHistory])
async def payment_history(
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    status_filter: Optional[PaymentStatus] = Query(None, alias="status"),
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    payment_service: PaymentService = Depends(get_payment_service),
):
    items, total, stats = await payment_service.history(
        session, user_id, status=status_filter, limit=limit, offset=offset
    )
    history = PaymentHistory(
        payments=[PaymentOut.model_validate(p) for p in items],
        stats=PaymentStatsOut(**stats._asdict()),
        pagination=OffsetPagination(limit=limit, offset=offset, total=total),
    )
    return ok(history)


__all__ = ["router"]

# Fin del archivo app/modules/payments/routes/payments.py
