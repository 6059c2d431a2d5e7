# -*- coding: utf-8 -*-
"""
WalletService: cargos/abonos atómicos y ledger de auditoría.
"""

import pytest

from app.shared.utils.http_exceptions import (
    InsufficientCreditsError,
    ValidationError,
    WalletNotFoundError,
)
from app.modules.payments.enums import CreditTxType


async def test_get_balance(session, wallet_service, user):
    assert await wallet_service.get_balance(session, user.id) == 100


async def test_deduct_writes_ledger_row(session, wallet_service, user):
    change = await wallet_service.deduct(
        session, user.id, 30, operation_code="video_generation", description="Render"
    )

    assert change.previous_balance == 100
    assert change.new_balance == 70
    assert change.total_credits_used == 30
    assert change.amount == 30

    items, total = await wallet_service.history(session, user.id, limit=10)
    assert total == 1
    tx = items[0]
    assert tx.id == change.transaction_id
    assert tx.tx_type == CreditTxType.DEBIT
    assert tx.credits_delta == -30
    assert tx.balance_after == 70
    assert tx.operation_code == "video_generation"


async def test_insufficient_credits_does_not_mutate(session, wallet_service, user):
    with pytest.raises(InsufficientCreditsError) as exc_info:
        await wallet_service.deduct(session, user.id, 200)

    err = exc_info.value
    assert err.status_code == 402
    assert err.data == {"required": 200, "available": 100, "shortage": 100}
    assert await wallet_service.get_balance(session, user.id) == 100
    assert (await wallet_service.history(session, user.id, limit=10))[1] == 0


async def test_deduct_exact_balance_reaches_zero(session, wallet_service, user):
    change = await wallet_service.deduct(session, user.id, 100)
    assert change.new_balance == 0
    with pytest.raises(InsufficientCreditsError):
        await wallet_service.deduct(session, user.id, 1)


async def test_second_deduct_sees_first(session, wallet_service, user):
    await wallet_service.deduct(session, user.id, 60)
    with pytest.raises(InsufficientCreditsError) as exc_info:
        await wallet_service.deduct(session, user.id, 60)
    assert exc_info.value.available == 40


async def test_add_then_deduct_round_trip(session, wallet_service, user):
    added = await wallet_service.add(session, user.id, 50, operation_code="video_refund", video_id=None)
    assert added.new_balance == 150
    assert added.total_credits_used == 0

    deducted = await wallet_service.deduct(session, user.id, 50)
    assert deducted.new_balance == 100
    assert deducted.total_credits_used == 50

    items, total = await wallet_service.history(session, user.id, limit=10)
    assert total == 2
    assert {tx.tx_type for tx in items} == {CreditTxType.CREDIT, CreditTxType.DEBIT}
    assert sum(tx.credits_delta for tx in items) == 0


@pytest.mark.parametrize("amount", [0, -5, 1.5, "10", True, None])
async def test_invalid_amounts_are_rejected(session, wallet_service, user, amount):
    with pytest.raises(ValidationError) as exc_info:
        await wallet_service.deduct(session, user.id, amount)
    assert exc_info.value.fields == ["amount"]
    with pytest.raises(ValidationError):
        await wallet_service.add(session, user.id, amount)


async def test_missing_wallet(session, wallet_service):
    with pytest.raises(WalletNotFoundError):
        await wallet_service.get_balance(session, 9999)
    with pytest.raises(WalletNotFoundError):
        await wallet_service.deduct(session, 9999, 5)
    with pytest.raises(WalletNotFoundError):
        await wallet_service.add(session, 9999, 5)


async def test_ensure_wallet_is_idempotent(session, wallet_service, user):
    first = await wallet_service.ensure_wallet(session, user.id)
    second = await wallet_service.ensure_wallet(session, user.id)
    assert first.id == second.id
    assert second.current_balance == 100


async def test_ensure_wallet_uses_initial_credits(session, wallet_service):
    from app.modules.auth.models import User

    newcomer = User(email="carol@example.com", name="carol")
    session.add(newcomer)
    await session.flush()

    wallet = await wallet_service.ensure_wallet(session, newcomer.id)

    assert wallet.current_balance == wallet_service.settings.initial_credits
    assert wallet.total_credits_used == 0


async def test_reset_restores_default_balance(session, wallet_service, user):
    await wallet_service.deduct(session, user.id, 40)

    change = await wallet_service.reset(session, user.id)

    default = wallet_service.settings.initial_credits
    assert change.previous_balance == 60
    assert change.new_balance == default
    assert change.total_credits_used == 0
    items, _ = await wallet_service.history(session, user.id, limit=1)
    assert items[0].tx_type == CreditTxType.ADJUSTMENT
    assert items[0].operation_code == "wallet_reset"


async def test_history_pagination(session, wallet_service, user):
    for _ in range(5):
        await wallet_service.deduct(session, user.id, 1)

    page, total = await wallet_service.history(session, user.id, limit=2, offset=2)

    assert total == 5
    assert len(page) == 2
    # Más reciente primero: 95, 96 | 97, 98 | 99
    assert [tx.balance_after for tx in page] == [97, 98]
