# -*- coding: utf-8 -*-
"""
PaymentService: liquidación idempotente, fallos, reembolsos e historial.
"""

from decimal import Decimal

import pytest

from app.shared.utils.http_exceptions import (
    ForbiddenError,
    PaymentNotFoundError,
    PaymentStateError,
)
from app.modules.payments.enums import CreditTxType, PaymentStatus


async def _pending(session, payment_service, user, *, session_id="cs_test_1", credits=100, amount="1.00"):
    payment = await payment_service.create_pending(
        session,
        user_id=user.id,
        amount=Decimal(amount),
        currency="usd",
        credits_awarded=credits,
        payment_gateway="stripe",
        metadata={"source": "test"},
    )
    await payment_service.attach_gateway_session(session, payment, session_id)
    return payment


async def test_create_pending(session, payment_service, user):
    payment = await _pending(session, payment_service, user)

    assert payment.id is not None
    assert payment.status == PaymentStatus.PENDING
    assert payment.currency == "USD"
    assert payment.gateway_session_id == "cs_test_1"
    assert payment.payment_metadata == {"source": "test"}


async def test_complete_payment_credits_wallet_once(session, payment_service, wallet_service, user):
    payment = await _pending(session, payment_service, user)

    first = await payment_service.complete_payment(
        session, gateway_session_id="cs_test_1", gateway_payment_id="pi_1"
    )
    assert first.already_completed is False
    assert first.payment.status == PaymentStatus.COMPLETED
    assert first.payment.gateway_payment_id == "pi_1"
    assert first.payment.completed_at is not None
    assert first.balance_change.new_balance == 200

    # Segunda entrega del mismo evento
    second = await payment_service.complete_payment(
        session, gateway_session_id="cs_test_1", gateway_payment_id="pi_1"
    )
    assert second.already_completed is True
    assert second.balance_change is None
    assert await wallet_service.get_balance(session, user.id) == 200

    items, total = await wallet_service.history(session, user.id, limit=10)
    assert total == 1
    assert items[0].tx_type == CreditTxType.CREDIT
    assert items[0].payment_id == payment.id
    assert items[0].operation_code == "payment_settlement"


async def test_complete_unknown_session(session, payment_service):
    with pytest.raises(PaymentNotFoundError):
        await payment_service.complete_payment(session, gateway_session_id="cs_missing")


async def test_declined_then_paid_payment_is_settled(session, payment_service, wallet_service, user):
    payment = await _pending(session, payment_service, user)
    await payment_service.mark_failed(session, payment_id=payment.id, error_code="card_declined")

    # El cliente reintenta con otra tarjeta en la misma sesión de checkout
    result = await payment_service.complete_payment(
        session, gateway_session_id="cs_test_1", gateway_payment_id="pi_second_card"
    )

    assert result.already_completed is False
    assert result.payment.status == PaymentStatus.COMPLETED
    assert result.payment.gateway_payment_id == "pi_second_card"
    assert await wallet_service.get_balance(session, user.id) == 200


async def test_refunded_payment_cannot_be_completed_again(session, payment_service, wallet_service, user):
    payment = await _pending(session, payment_service, user)
    await payment_service.complete_payment(session, gateway_session_id="cs_test_1", gateway_payment_id="pi_1")
    await payment_service.mark_refunded(session, payment.id)

    with pytest.raises(PaymentStateError) as exc_info:
        await payment_service.complete_payment(session, gateway_session_id="cs_test_1")

    assert exc_info.value.status_code == 409
    assert await wallet_service.get_balance(session, user.id) == 200


async def test_mark_failed_records_error_details(session, payment_service, user):
    payment = await _pending(session, payment_service, user)

    failed = await payment_service.mark_failed(
        session, payment_id=payment.id, error_code="card_declined", error_message="Your card was declined."
    )

    assert failed.status == PaymentStatus.FAILED
    assert failed.payment_metadata["source"] == "test"
    assert failed.payment_metadata["error_details"] == {
        "code": "card_declined",
        "message": "Your card was declined.",
    }
    assert "failed_at" in failed.payment_metadata


async def test_mark_failed_without_match_is_noop(session, payment_service):
    assert await payment_service.mark_failed(session, gateway_payment_id="pi_unknown") is None


async def test_mark_failed_ignores_completed_payment(session, payment_service, user):
    await _pending(session, payment_service, user)
    await payment_service.complete_payment(session, gateway_session_id="cs_test_1", gateway_payment_id="pi_1")

    payment = await payment_service.mark_failed(session, gateway_payment_id="pi_1")

    assert payment.status == PaymentStatus.COMPLETED


async def test_refund_only_from_completed(session, payment_service, wallet_service, user):
    payment = await _pending(session, payment_service, user)

    with pytest.raises(PaymentStateError):
        await payment_service.mark_refunded(session, payment.id)

    await payment_service.complete_payment(session, gateway_session_id="cs_test_1")
    refunded = await payment_service.mark_refunded(session, payment.id)
    assert refunded.status == PaymentStatus.REFUNDED
    # El reembolso no revierte créditos
    assert await wallet_service.get_balance(session, user.id) == 200

    again = await payment_service.mark_refunded(session, payment.id)
    assert again.status == PaymentStatus.REFUNDED

    with pytest.raises(PaymentNotFoundError):
        await payment_service.mark_refunded(session, 9999)


async def test_get_for_user_by_session_checks_owner(session, payment_service, user, other_user):
    await _pending(session, payment_service, user)

    found = await payment_service.get_for_user_by_session(
        session, gateway_session_id="cs_test_1", user_id=user.id
    )
    assert found.user_id == user.id

    with pytest.raises(ForbiddenError):
        await payment_service.get_for_user_by_session(
            session, gateway_session_id="cs_test_1", user_id=other_user.id
        )
    with pytest.raises(PaymentNotFoundError):
        await payment_service.get_for_user_by_session(
            session, gateway_session_id="cs_nope", user_id=user.id
        )


async def test_history_stats_count_only_completed(session, payment_service, user, other_user):
    await _pending(session, payment_service, user, session_id="cs_a", credits=100, amount="1.00")
    await _pending(session, payment_service, user, session_id="cs_b", credits=500, amount="5.00")
    await _pending(session, payment_service, user, session_id="cs_c", credits=50, amount="0.50")
    await _pending(session, payment_service, other_user, session_id="cs_other")
    await payment_service.complete_payment(session, gateway_session_id="cs_a")
    await payment_service.complete_payment(session, gateway_session_id="cs_b")

    items, total, stats = await payment_service.history(session, user.id, limit=10)
    assert total == 3
    assert {p.gateway_session_id for p in items} == {"cs_a", "cs_b", "cs_c"}
    assert stats.total_payments == 2
    assert stats.total_amount_spent == Decimal("6.00")
    assert stats.total_credits_purchased == 600

    completed, completed_total, _ = await payment_service.history(
        session, user.id, status=PaymentStatus.COMPLETED, limit=1
    )
    assert completed_total == 2
    assert len(completed) == 1
