# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/wallet_repository.py

Repositorio para la tabla wallets.

Las mutaciones de saldo son UPDATE atómicos con RETURNING: el chequeo
de suficiencia va en el WHERE, así dos cargos concurrentes nunca pasan
ambos contra un saldo viejo.

Fecha: 17/10/2026
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.payments.models.wallet_models import Wallet


class BalanceRow(NamedTuple):
    wallet_id: int
    current_balance: int
    total_credits_used: int


class WalletRepository(BaseRepository[Wallet]):
    def __init__(self):
        super().__init__(Wallet)

    # -----------------------------------------------------------
    # Lecturas (siempre refrescando el identity map)
    # -----------------------------------------------------------
    async def get_by_user_id(self, session: AsyncSession, user_id: int) -> Optional[Wallet]:
        stmt = (
            select(Wallet)
            .where(Wallet.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def exists(self, session: AsyncSession, user_id: int) -> bool:
        return (await self.get_by_user_id(session, user_id)) is not None

    # -----------------------------------------------------------
    # Mutaciones atómicas
    # -----------------------------------------------------------
    async def decrement_if_sufficient(
        self, session: AsyncSession, user_id: int, amount: int
    ) -> Optional[BalanceRow]:
        """
        Resta `amount` solo si current_balance >= amount.
        None si la wallet no existe o el saldo no alcanza.
        """
        stmt = (
            update(Wallet)
            .where(Wallet.user_id == user_id, Wallet.current_balance >= amount)
            .values(
                current_balance=Wallet.current_balance - amount,
                total_credits_used=Wallet.total_credits_used + amount,
            )
            .returning(Wallet.id, Wallet.current_balance, Wallet.total_credits_used)
            .execution_options(synchronize_session=False)
        )
        row = (await session.execute(stmt)).one_or_none()
        return BalanceRow(*row) if row is not None else None

    async def increment(
        self, session: AsyncSession, user_id: int, amount: int
    ) -> Optional[BalanceRow]:
        """Suma `amount` a current_balance. None si la wallet no existe."""
        stmt = (
            update(Wallet)
            .where(Wallet.user_id == user_id)
            .values(current_balance=Wallet.current_balance + amount)
            .returning(Wallet.id, Wallet.current_balance, Wallet.total_credits_used)
            .execution_options(synchronize_session=False)
        )
        row = (await session.execute(stmt)).one_or_none()
        return BalanceRow(*row) if row is not None else None

    async def set_balance(
        self, session: AsyncSession, user_id: int, balance: int
    ) -> Optional[BalanceRow]:
        """Fija saldo y reinicia total_credits_used (reset administrativo)."""
        stmt = (
            update(Wallet)
            .where(Wallet.user_id == user_id)
            .values(current_balance=balance, total_credits_used=0)
            .returning(Wallet.id, Wallet.current_balance, Wallet.total_credits_used)
            .execution_options(synchronize_session=False)
        )
        row = (await session.execute(stmt)).one_or_none()
        return BalanceRow(*row) if row is not None else None

# Fin del archivo app/modules/payments/repositories/wallet_repository.py
