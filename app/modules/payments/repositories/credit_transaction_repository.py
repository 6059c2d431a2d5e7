# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/credit_transaction_repository.py

Repositorio del ledger de auditoría (credit_transactions).

Fecha: 17/10/2026
"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.payments.models.credit_transaction_models import CreditTransaction


class CreditTransactionRepository(BaseRepository[CreditTransaction]):
    def __init__(self):
        super().__init__(CreditTransaction)

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: int,
        *,
        limit: int,
        offset: int = 0,
    ) -> Sequence[CreditTransaction]:
        """Movimientos del usuario, más recientes primero."""
        return await self.page(
            session,
            CreditTransaction.user_id == user_id,
            order_by=(CreditTransaction.created_at.desc(), CreditTransaction.id.desc()),
            limit=limit,
            offset=offset,
        )

    async def count_for_user(self, session: AsyncSession, user_id: int) -> int:
        return await self.count(session, CreditTransaction.user_id == user_id)

# Fin del archivo app/modules/payments/repositories/credit_transaction_repository.py
