# -*- coding: utf-8 -*-
"""
Fachada de checkout: reglas de monto, Payment PENDING y fallo del gateway.
"""

from decimal import Decimal

import pytest

from app.shared.config.settings_payments import PaymentsSettings
from app.shared.utils.http_exceptions import (
    PaymentLimitError,
    UpstreamProviderError,
    ValidationError,
)
from app.modules.payments.enums import PaymentStatus
from app.modules.payments.facades.checkout import compute_checkout_amount, start_checkout
from app.modules.payments.models.payment_models import Payment
from app.modules.providers.payment import PaymentProvider


class FakeGateway(PaymentProvider):
    """Gateway en memoria que registra los parámetros recibidos."""

    provider_name = "fakepay"

    def __init__(self, *, fail: bool = False):
        super().__init__("fakepay", {}, include_raw=False)
        self.fail = fail
        self.calls: list[dict] = []

    async def create_checkout_session(self, params):
        self.validate_checkout_params(params)
        self.calls.append(dict(params))
        if self.fail:
            return {
                "success": False,
                "provider": self.name,
                "error": {"message": "gateway down", "code": "RETRY_EXHAUSTED", "status": 503},
            }
        return self.normalize_response(
            {
                "session_id": f"cs_fake_{params['metadata']['payment_id']}",
                "url": "https://pay.test/session",
                "amount": int(params["amount"] * 100),
                "currency": params["currency"].lower(),
                "credits_awarded": params["credits_awarded"],
            }
        )


@pytest.mark.parametrize(
    "credits, amount",
    [(1, Decimal("0.01")), (100, Decimal("1.00")), (12345, Decimal("123.45")), (100_000, Decimal("1000.00"))],
)
def test_compute_checkout_amount(credits, amount):
    assert compute_checkout_amount(credits, PaymentsSettings()) == amount


@pytest.mark.parametrize("credits", [0, -1, 100_001, True, 2.5, "100"])
def test_compute_checkout_amount_rejects_out_of_range(credits):
    with pytest.raises(ValidationError) as exc_info:
        compute_checkout_amount(credits, PaymentsSettings())
    assert exc_info.value.fields == ["credits"]


def test_compute_checkout_amount_enforces_payment_cap():
    settings = PaymentsSettings(price_per_credit=Decimal("0.05"), max_payment_amount=Decimal("10.00"))
    assert compute_checkout_amount(200, settings) == Decimal("10.00")
    with pytest.raises(PaymentLimitError) as exc_info:
        compute_checkout_amount(201, settings)
    assert exc_info.value.status_code == 400
    assert exc_info.value.data["max_amount"] == "10.00"


async def test_start_checkout_creates_pending_payment(session, payment_service, user):
    gateway = FakeGateway()

    response = await start_checkout(
        session, user_id=user.id, credits=100, payment_service=payment_service, provider=gateway
    )

    assert response.session_id == f"cs_fake_{response.payment_id}"
    assert response.amount == 100
    assert response.currency == "USD"
    assert response.credits_awarded == 100

    call = gateway.calls[0]
    assert call["amount"] == Decimal("1.00")
    assert call["user_id"] == user.id
    assert call["success_url"].endswith("?session_id={CHECKOUT_SESSION_ID}")
    assert call["metadata"] == {"payment_id": response.payment_id}

    payment = await session.get(Payment, response.payment_id)
    assert payment.status == PaymentStatus.PENDING
    assert payment.gateway_session_id == response.session_id
    assert payment.payment_gateway == "fakepay"
    assert payment.amount == Decimal("1.00")


async def test_start_checkout_gateway_failure(session, payment_service, user):
    with pytest.raises(UpstreamProviderError) as exc_info:
        await start_checkout(
            session,
            user_id=user.id,
            credits=100,
            payment_service=payment_service,
            provider=FakeGateway(fail=True),
        )

    err = exc_info.value
    assert err.status_code == 502
    assert err.data == {"provider": "fakepay", "upstream_status": 503, "code": "RETRY_EXHAUSTED"}


async def test_start_checkout_invalid_credits_never_reaches_gateway(session, payment_service, user):
    gateway = FakeGateway()
    with pytest.raises(ValidationError):
        await start_checkout(session, user_id=user.id, credits=0, payment_service=payment_service, provider=gateway)
    assert gateway.calls == []
