# -*- coding: utf-8 -*-
"""
app/modules/payments/services/wallet_service.py

Ledger de créditos: fuente de verdad del saldo por usuario.

Operaciones:
- get_balance / get_wallet
- deduct: cargo atómico con detección de saldo insuficiente
- add: abono atómico
- reset: utilidad administrativa (saldo por defecto, consumo en cero)
- ensure_wallet: crea la wallet con los créditos iniciales si falta

Cada mutación escribe un CreditTransaction en la misma transacción.
El servicio no hace commit: lo decide la capa que abre la transacción
(rutas / facades), de modo que el ledger se compone con la liquidación.

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_credits import CreditsSettings, get_credits_settings
from app.shared.utils.http_exceptions import (
    InsufficientCreditsError,
    ValidationError,
    WalletNotFoundError,
)
from app.modules.payments.enums import CreditTxType
from app.modules.payments.models.credit_transaction_models import CreditTransaction
from app.modules.payments.models.wallet_models import Wallet
from app.modules.payments.repositories.credit_transaction_repository import (
    CreditTransactionRepository,
)
from app.modules.payments.repositories.wallet_repository import BalanceRow, WalletRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceChange:
    """Resultado de una mutación del saldo."""

    user_id: int
    previous_balance: int
    new_balance: int
    total_credits_used: int
    amount: int
    transaction_id: int
    timestamp: datetime


def _validate_amount(amount: Any) -> int:
    # bool es subclase de int; no es un monto válido
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValidationError("Amount must be a positive integer", fields=["amount"])
    return amount


class WalletService:
    """Operaciones atómicas sobre la wallet y su ledger de auditoría."""

    def __init__(
        self,
        wallet_repo: WalletRepository,
        credit_repo: CreditTransactionRepository,
        settings: Optional[CreditsSettings] = None,
    ) -> None:
        self.wallet_repo = wallet_repo
        self.credit_repo = credit_repo
        self.settings = settings or get_credits_settings()

    # ---------------------------------------------------------
    # Lecturas
    # ---------------------------------------------------------
    async def get_wallet(self, session: AsyncSession, user_id: int) -> Wallet:
        wallet = await self.wallet_repo.get_by_user_id(session, user_id)
        if wallet is None:
            raise WalletNotFoundError(user_id)
        return wallet

    async def get_balance(self, session: AsyncSession, user_id: int) -> int:
        return (await self.get_wallet(session, user_id)).current_balance

    async def ensure_wallet(self, session: AsyncSession, user_id: int) -> Wallet:
        """
        Devuelve la wallet del usuario, creándola con INITIAL_CREDITS si no existe.

        La creación va en un savepoint: si otra petición la creó primero
        (IntegrityError por UNIQUE user_id) se relee la existente.
        """
        wallet = await self.wallet_repo.get_by_user_id(session, user_id)
        if wallet is not None:
            return wallet

        try:
            async with session.begin_nested():
                wallet = await self.wallet_repo.create(
                    session,
                    user_id=user_id,
                    current_balance=self.settings.initial_credits,
                    total_credits_used=0,
                )
        except IntegrityError:
            logger.info("Wallet already exists for user_id=%s (concurrent creation)", user_id)
            return await self.get_wallet(session, user_id)

        logger.info(
            "Wallet created for user_id=%s with %d initial credits",
            user_id,
            self.settings.initial_credits,
        )
        return wallet

    # ---------------------------------------------------------
    # Mutaciones
    # ---------------------------------------------------------
    async def deduct(
        self,
        session: AsyncSession,
        user_id: int,
        amount: int,
        *,
        operation_code: str = "manual_deduct",
        description: Optional[str] = None,
        video_id: Optional[int] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> BalanceChange:
        """
        Cargo atómico. Sin saldo suficiente lanza InsufficientCreditsError
        y no muta nada.
        """
        amount = _validate_amount(amount)

        row = await self.wallet_repo.decrement_if_sufficient(session, user_id, amount)
        if row is None:
            wallet = await self.wallet_repo.get_by_user_id(session, user_id)
            if wallet is None:
                raise WalletNotFoundError(user_id)
            if wallet.current_balance >= amount:
                # Un abono concurrente entró entre el UPDATE y la lectura
                row = await self.wallet_repo.decrement_if_sufficient(session, user_id, amount)
        if row is None:
            logger.info(
                "Insufficient credits user_id=%s required=%d available=%d",
                user_id,
                amount,
                wallet.current_balance,
            )
            raise InsufficientCreditsError(required=amount, available=wallet.current_balance)

        change = await self._record(
            session,
            user_id,
            row,
            delta=-amount,
            tx_type=CreditTxType.DEBIT,
            operation_code=operation_code,
            description=description,
            video_id=video_id,
            metadata=metadata,
        )
        logger.info(
            "Credits deducted user_id=%s amount=%d balance=%d->%d op=%s",
            user_id, amount, change.previous_balance, change.new_balance, operation_code,
        )
        return change

    async def add(
        self,
        session: AsyncSession,
        user_id: int,
        amount: int,
        *,
        operation_code: str = "manual_add",
        description: Optional[str] = None,
        payment_id: Optional[int] = None,
        video_id: Optional[int] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> BalanceChange:
        """Abono atómico."""
        amount = _validate_amount(amount)

        row = await self.wallet_repo.increment(session, user_id, amount)
        if row is None:
            raise WalletNotFoundError(user_id)

        change = await self._record(
            session,
            user_id,
            row,
            delta=amount,
            tx_type=CreditTxType.CREDIT,
            operation_code=operation_code,
            description=description,
            payment_id=payment_id,
            video_id=video_id,
            metadata=metadata,
        )
        logger.info(
            "Credits added user_id=%s amount=%d balance=%d->%d op=%s",
            user_id, amount, change.previous_balance, change.new_balance, operation_code,
        )
        return change

    async def reset(self, session: AsyncSession, user_id: int) -> BalanceChange:
        """Saldo al valor por defecto y total_credits_used en cero."""
        previous = await self.get_balance(session, user_id)
        default = self.settings.initial_credits

        row = await self.wallet_repo.set_balance(session, user_id, default)
        if row is None:
            raise WalletNotFoundError(user_id)

        delta = row.current_balance - previous
        tx = await self.credit_repo.create(
            session,
            user_id=user_id,
            tx_type=CreditTxType.ADJUSTMENT,
            credits_delta=delta,
            balance_after=row.current_balance,
            operation_code="wallet_reset",
            description="Wallet reset to default balance",
        )
        logger.warning("Wallet reset user_id=%s balance=%d->%d", user_id, previous, row.current_balance)
        return BalanceChange(
            user_id=user_id,
            previous_balance=previous,
            new_balance=row.current_balance,
            total_credits_used=row.total_credits_used,
            amount=delta,
            transaction_id=tx.id,
            timestamp=datetime.now(timezone.utc),
        )

    # ---------------------------------------------------------
    # Historial
    # ---------------------------------------------------------
    async def history(
        self, session: AsyncSession, user_id: int, *, limit: int, offset: int = 0
    ) -> tuple[Sequence[CreditTransaction], int]:
        items = await self.credit_repo.list_for_user(session, user_id, limit=limit, offset=offset)
        total = await self.credit_repo.count_for_user(session, user_id)
        return items, total

    # ---------------------------------------------------------
    # Interno
    # ---------------------------------------------------------
    async def _record(
        self,
        session: AsyncSession,
        user_id: int,
        row: BalanceRow,
        *,
        delta: int,
        tx_type: CreditTxType,
        operation_code: str,
        description: Optional[str] = None,
        payment_id: Optional[int] = None,
        video_id: Optional[int] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> BalanceChange:
        tx = await self.credit_repo.create(
            session,
            user_id=user_id,
            tx_type=tx_type,
            credits_delta=delta,
            balance_after=row.current_balance,
            operation_code=operation_code,
            description=description,
            payment_id=payment_id,
            video_id=video_id,
            tx_metadata=metadata,
        )
        return BalanceChange(
            user_id=user_id,
            previous_balance=row.current_balance - delta,
            new_balance=row.current_balance,
            total_credits_used=row.total_credits_used,
            amount=abs(delta),
            transaction_id=tx.id,
            timestamp=datetime.now(timezone.utc),
        )


__all__ = ["BalanceChange", "WalletService"]

# Fin del archivo app/modules/payments/services/wallet_service.py
