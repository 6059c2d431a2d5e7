# -*- coding: utf-8 -*-
"""
app/modules/providers/payment/stripe_provider.py

Proveedor Stripe: Checkout Sessions, webhooks firmados, detalles y
reembolsos.

- El SDK de Stripe es síncrono: cada llamada corre en threadpool y pasa
  por la política de reintentos compartida.
- La firma del webhook se verifica sobre los bytes crudos del request;
  el evento se decodifica solo después de verificar.
- Los montos llegan en unidades mayores (Decimal) y se convierten a
  centavos aquí.

Fecha: 17/10/2026
"""

from __future__ import annotations

import json
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Mapping, Optional

import stripe
from fastapi.concurrency import run_in_threadpool

from app.shared.core.http_retry_utils import RetryExhaustedError, is_retryable_error, retry_with_backoff
from app.shared.utils.http_exceptions import ValidationError, WebhookSignatureError

from .base import PaymentProvider

logger = logging.getLogger(__name__)

CENTS = Decimal("100")


def to_cents(amount: Decimal) -> int:
    """Unidades mayores -> centavos (half-up)."""
    return int((Decimal(str(amount)) * CENTS).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_cents(amount_cents: Optional[int]) -> Optional[Decimal]:
    if amount_cents is None:
        return None
    return (Decimal(amount_cents) / CENTS).quantize(Decimal("0.01"))


def is_retryable_stripe_error(exc: BaseException) -> bool:
    if isinstance(exc, stripe.APIConnectionError):
        return True
    if isinstance(exc, stripe.StripeError):
        status = exc.http_status
        return status is not None and (status >= 500 or status == 429)
    return is_retryable_error(exc)


def _to_plain(obj: Any) -> dict[str, Any]:
    if isinstance(obj, stripe.StripeObject):
        return json.loads(str(obj))
    return dict(obj)


def _int_or_none(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class StripeProvider(PaymentProvider):
    provider_name = "stripe"

    def __init__(self, name: Optional[str] = None, config: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        super().__init__(name, config, **kwargs)
        if not self.api_key:
            raise ValueError("Stripe secret key is not configured")

    @property
    def webhook_secret(self) -> Optional[str]:
        return self.config.get("webhook_secret")

    def public_config(self) -> dict[str, Any]:
        return {"timeout": self.timeout, "webhook_configured": bool(self.webhook_secret)}

    async def _stripe_call(self, func: Callable[..., Any], *, label: str, **params: Any) -> Any:
        return await retry_with_backoff(
            run_in_threadpool,
            func,
            policy=self._retry_policy,
            label=label,
            is_retryable=is_retryable_stripe_error,
            api_key=self.api_key,
            **params,
        )

    # -----------------------------------------------------------
    # Checkout
    # -----------------------------------------------------------
    def build_session_params(self, params: Mapping[str, Any]) -> dict[str, Any]:
        credits = params["credits_awarded"]
        metadata = {
            "user_id": str(params["user_id"]),
            "credits_awarded": str(credits),
            "payment_gateway": self.name,
            **{k: str(v) for k, v in (params.get("metadata") or {}).items()},
        }
        return {
            "mode": "payment",
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": str(params["currency"]).lower(),
                        "unit_amount": to_cents(params["amount"]),
                        "product_data": {
                            "name": f"{credits} Credits",
                            "description": f"Purchase {credits} video generation credits",
                        },
                    },
                    "quantity": 1,
                }
            ],
            "success_url": params["success_url"],
            "cancel_url": params["cancel_url"],
            "metadata": metadata,
            # Para correlacionar payment_intent.payment_failed con el pago
            "payment_intent_data": {"metadata": metadata},
            "client_reference_id": str(params["user_id"]),
        }

    async def create_checkout_session(self, params: Mapping[str, Any]) -> dict[str, Any]:
        self.validate_checkout_params(params)
        session_params = self.build_session_params(params)
        logger.info(
            "Creating Stripe checkout session user_id=%s credits=%s",
            params["user_id"], params["credits_awarded"],
        )
        try:
            session = await self._stripe_call(
                stripe.checkout.Session.create,
                label="Stripe checkout session",
                **session_params,
            )
        except (RetryExhaustedError, stripe.StripeError) as exc:
            return self.normalize_error(exc)

        logger.info("Stripe checkout session created: %s", session.id)
        return self.normalize_response(
            {
                "session_id": session.id,
                "url": session.url,
                "amount": session_params["line_items"][0]["price_data"]["unit_amount"],
                "currency": session_params["line_items"][0]["price_data"]["currency"],
                "credits_awarded": params["credits_awarded"],
            }
        )

    # -----------------------------------------------------------
    # Webhooks
    # -----------------------------------------------------------
    def verify_webhook_signature(
        self, raw_body: bytes, signature: Optional[str], secret: Optional[str] = None
    ) -> dict[str, Any]:
        """
        Verifica Stripe-Signature contra el body crudo y devuelve el evento.

        Raises:
            WebhookSignatureError: firma ausente, inválida o payload corrupto
        """
        secret = secret or self.webhook_secret
        if not secret:
            raise WebhookSignatureError("Webhook secret is not configured")
        if not signature:
            raise WebhookSignatureError("Missing Stripe-Signature header")

        payload = raw_body.decode("utf-8") if isinstance(raw_body, bytes) else raw_body
        try:
            stripe.WebhookSignature.verify_header(
                payload, signature, secret, stripe.Webhook.DEFAULT_TOLERANCE
            )
            event = json.loads(payload)
        except stripe.SignatureVerificationError as exc:
            logger.warning("Stripe webhook signature verification failed: %s", exc)
            raise WebhookSignatureError(
                f"Webhook signature verification failed: {exc.user_message or exc}"
            ) from exc
        except ValueError as exc:
            raise WebhookSignatureError("Invalid webhook payload") from exc

        logger.info("Stripe webhook verified: %s %s", event.get("type"), event.get("id"))
        return event

    async def handle_webhook_event(self, event: Mapping[str, Any]) -> dict[str, Any]:
        """Traduce un evento verificado a {success, event_type, data}; no persiste nada."""
        event_type = event.get("type")
        obj = (event.get("data") or {}).get("object") or {}
        metadata = obj.get("metadata") or {}

        if event_type == "checkout.session.completed":
            data = {
                "session_id": obj.get("id"),
                "payment_intent_id": obj.get("payment_intent"),
                "user_id": _int_or_none(metadata.get("user_id")),
                "credits_awarded": _int_or_none(metadata.get("credits_awarded")),
                "payment_id": _int_or_none(metadata.get("payment_id")),
                "amount_total": obj.get("amount_total"),
                "currency": obj.get("currency"),
                "payment_status": obj.get("payment_status"),
                "metadata": dict(metadata),
            }
        elif event_type == "payment_intent.succeeded":
            data = {
                "payment_intent_id": obj.get("id"),
                "amount": obj.get("amount"),
                "currency": obj.get("currency"),
                "status": obj.get("status"),
            }
        elif event_type == "payment_intent.payment_failed":
            data = {
                "payment_intent_id": obj.get("id"),
                "payment_id": _int_or_none(metadata.get("payment_id")),
                "amount": obj.get("amount"),
                "currency": obj.get("currency"),
                "status": obj.get("status"),
                "last_payment_error": obj.get("last_payment_error"),
            }
        elif event_type == "charge.refunded":
            amount = obj.get("amount")
            refunded_amount = obj.get("amount_refunded")
            data = {
                "charge_id": obj.get("id"),
                "payment_intent_id": obj.get("payment_intent"),
                "amount": amount,
                "amount_refunded": refunded_amount,
                "currency": obj.get("currency"),
                "refunded": obj.get("refunded"),
                "full_refund": amount is not None and refunded_amount == amount,
            }
        else:
            logger.info("Unhandled Stripe event type: %s", event_type)
            return {
                "success": True,
                "event_type": event_type,
                "message": f"Event type {event_type} received but not processed",
            }

        return {"success": True, "event_type": event_type, "data": data}

    # -----------------------------------------------------------
    # Consultas y reembolsos
    # -----------------------------------------------------------
    async def get_payment_details(self, payment_id: str) -> dict[str, Any]:
        if payment_id.startswith("cs_"):
            retrieve, label = stripe.checkout.Session.retrieve, "Stripe retrieve session"
        elif payment_id.startswith("pi_"):
            retrieve, label = stripe.PaymentIntent.retrieve, "Stripe retrieve payment intent"
        else:
            raise ValidationError(f"Unknown payment ID format: {payment_id}", fields=["payment_id"])

        details = await self._stripe_call(retrieve, label=label, id=payment_id)
        return _to_plain(details)

    async def create_refund(self, gateway_payment_id: str, amount: Optional[Decimal] = None) -> dict[str, Any]:
        """Reembolso total (amount=None) o parcial en unidades mayores."""
        params: dict[str, Any] = {"payment_intent": gateway_payment_id}
        if amount is not None:
            params["amount"] = to_cents(amount)
        refund = await self._stripe_call(stripe.Refund.create, label="Stripe refund", **params)
        logger.info("Stripe refund created: %s for %s", refund.id, gateway_payment_id)
        return _to_plain(refund)


__all__ = ["StripeProvider", "from_cents", "is_retryable_stripe_error", "to_cents"]

# Fin del archivo app/modules/providers/payment/stripe_provider.py
