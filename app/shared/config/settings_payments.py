# -*- coding: utf-8 -*-
"""
app/shared/config/settings_payments.py

Configuración de pagos para la compra de créditos.

Descripción:
    Centraliza proveedor por defecto, precio por crédito, límites de compra,
    URLs de retorno del checkout y secretos de Stripe.

Fecha: 17/10/2026
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaymentsSettings(BaseSettings):
    """Configuración del sistema de pagos."""

    # =========================================================================
    # PROVEEDOR
    # =========================================================================

    payment_provider: str = Field(
        default="stripe",
        description="Proveedor de pago usado por el checkout (nombre registrado en la fábrica)"
    )

    payment_currency: str = Field(
        default="USD",
        description="Moneda única de cobro (código ISO 4217)"
    )

    # =========================================================================
    # STRIPE
    # =========================================================================

    stripe_secret_key: Optional[str] = Field(
        default=None,
        description="Stripe secret key (sk_live_... o sk_test_...)"
    )

    stripe_publishable_key: Optional[str] = Field(
        default=None,
        description="Stripe publishable key (pk_live_... o pk_test_...)"
    )

    stripe_webhook_secret: Optional[str] = Field(
        default=None,
        description="Stripe webhook signing secret (whsec_...)"
    )

    stripe_timeout: int = Field(
        default=30,
        description="Timeout de llamadas a la API de Stripe (segundos)"
    )

    # =========================================================================
    # PRECIO Y LÍMITES
    # =========================================================================

    price_per_credit: Decimal = Field(
        default=Decimal("0.01"),
        description="Precio de un crédito en unidades mayores de la moneda (USD)"
    )

    min_purchase_credits: int = Field(
        default=1,
        description="Mínimo de créditos por compra"
    )

    max_purchase_credits: int = Field(
        default=100_000,
        description="Máximo de créditos por compra"
    )

    max_payment_amount: Decimal = Field(
        default=Decimal("1000.00"),
        description="Monto máximo de un pago en unidades mayores (USD)"
    )

    # =========================================================================
    # REDIRECTS DEL CHECKOUT
    # =========================================================================

    payment_success_url: str = Field(
        default="http://localhost:5173/payment/success",
        description="URL de retorno tras un pago exitoso"
    )

    payment_cancel_url: str = Field(
        default="http://localhost:5173/payment/cancel",
        description="URL de retorno tras cancelar el checkout"
    )

    @field_validator("payment_provider", mode="before")
    @classmethod
    def _normalize_provider(cls, v: Optional[str]) -> str:
        return (v or "stripe").strip().lower()

    @field_validator("payment_currency", mode="before")
    @classmethod
    def _normalize_currency(cls, v: Optional[str]) -> str:
        return (v or "USD").strip().upper()

    @property
    def checkout_success_url(self) -> str:
        """URL de éxito con el placeholder que Stripe sustituye por el id de sesión."""
        return f"{self.payment_success_url}?session_id={{CHECKOUT_SESSION_ID}}"

    # =========================================================================
    # CONFIGURACIÓN DE PYDANTIC
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton global
_payments_settings: Optional[PaymentsSettings] = None


def get_payments_settings() -> PaymentsSettings:
    """
    Obtiene la instancia global de configuración de pagos.

    Returns:
        PaymentsSettings: Configuración de pagos
    """
    global _payments_settings
    if _payments_settings is None:
        _payments_settings = PaymentsSettings()
    return _payments_settings


__all__ = [
    "PaymentsSettings",
    "get_payments_settings",
]
# Fin del archivo app/shared/config/settings_payments.py
