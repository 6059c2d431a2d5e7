# -*- coding: utf-8 -*-
"""
Config global de tests.

- Variables de entorno de prueba ANTES de importar la app (los settings
  se cachean en el primer uso).
- Base SQLite en memoria (aiosqlite) recreada por test.
- App FastAPI con asgi-lifespan y dependencias sobrescribibles.
- Firma de webhooks Stripe real (HMAC-SHA256) para probar el flujo completo.
"""

import hashlib
import hmac
import json
import os
import time
from collections.abc import AsyncIterator

import pytest

# -----------------------------------------------------------------------------
# 0) Entorno de prueba
# -----------------------------------------------------------------------------
os.environ["PYTHON_ENV"] = "test"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-at-least-32-characters")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_secret")
os.environ.setdefault("HEYGEN_API_KEY", "heygen-test-key")
os.environ.setdefault("VEO3_API_KEY", "veo3-test-key")
os.environ.setdefault("KIE_API_KEY", "kie-test-key")
os.environ.setdefault("RETRY_INITIAL_DELAY_MS", "0")
os.environ.setdefault("RETRY_MAX_DELAY_MS", "0")

from httpx import ASGITransport, AsyncClient  # noqa: E402
from asgi_lifespan import LifespanManager  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.shared.database.database import (  # noqa: E402
    SessionLocal,
    configure_engine,
    create_all_tables,
    dispose_engine,
)

# Registra todas las tablas en el metadata
import app.modules.payments.models  # noqa: E402,F401
import app.modules.videos.models  # noqa: E402,F401

from app.modules.auth.models import User  # noqa: E402
from app.modules.payments.dependencies import build_payment_service, build_wallet_service  # noqa: E402
from app.modules.providers import register_builtin_providers  # noqa: E402

WEBHOOK_SECRET = os.environ["STRIPE_WEBHOOK_SECRET"]

register_builtin_providers()


# -----------------------------------------------------------------------------
# 1) Base de datos
# -----------------------------------------------------------------------------
@pytest.fixture
async def db_engine():
    engine = configure_engine("sqlite+aiosqlite:///:memory:")
    await create_all_tables()
    yield engine
    await dispose_engine()


@pytest.fixture
async def session(db_engine) -> AsyncIterator[AsyncSession]:
    async with SessionLocal() as s:
        yield s


@pytest.fixture
def wallet_service():
    return build_wallet_service()


@pytest.fixture
def payment_service(wallet_service):
    return build_payment_service(wallet_service)


async def create_user(session: AsyncSession, wallet_service, *, email: str, balance: int = 100) -> User:
    """Usuario + wallet con `balance` créditos (confirmado)."""
    user = User(email=email, name=email.split("@")[0])
    session.add(user)
    await session.flush()
    wallet = await wallet_service.ensure_wallet(session, user.id)
    wallet.current_balance = balance
    await session.commit()
    return user


@pytest.fixture
async def user(session, wallet_service) -> User:
    return await create_user(session, wallet_service, email="alice@example.com")


@pytest.fixture
async def other_user(session, wallet_service) -> User:
    return await create_user(session, wallet_service, email="bob@example.com")


# -----------------------------------------------------------------------------
# 2) Reintentos sin esperas reales
# -----------------------------------------------------------------------------
@pytest.fixture
def no_sleep(monkeypatch):
    """Evita esperas reales en backoff (asyncio.sleep no-op)."""
    calls: list[float] = []

    async def _noop(delay, *args, **kwargs):
        calls.append(delay)
        return None

    monkeypatch.setattr("asyncio.sleep", _noop)
    return calls


# -----------------------------------------------------------------------------
# 3) App FastAPI + cliente httpx con ciclo de vida
# -----------------------------------------------------------------------------
@pytest.fixture(scope="session")
def app():
    from app.main import app as fastapi_app
    return fastapi_app


@pytest.fixture
def current_user_id():
    """Usuario autenticado en las rutas; los tests pueden cambiar el valor."""
    return {"id": 1}


@pytest.fixture
async def client(app, db_engine, user, current_user_id) -> AsyncIterator[AsyncClient]:
    from app.modules.auth.dependencies import get_current_user_id

    current_user_id["id"] = user.id

    async def _current_user() -> int:
        return current_user_id["id"]

    app.dependency_overrides[get_current_user_id] = _current_user
    try:
        async with LifespanManager(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://testserver") as c:
                yield c
    finally:
        app.dependency_overrides.clear()


# -----------------------------------------------------------------------------
# 4) Webhooks Stripe firmados
# -----------------------------------------------------------------------------
def stripe_signature(payload: str, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Header Stripe-Signature válido para `payload` (t=...,v1=HMAC-SHA256)."""
    ts = int(time.time()) if timestamp is None else timestamp
    signed = f"{ts}.{payload}".encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={digest}"


def stripe_event(event_type: str, obj: dict, event_id: str = "evt_test_1") -> str:
    return json.dumps(
        {
            "id": event_id,
            "object": "event",
            "type": event_type,
            "data": {"object": obj},
        }
    )


@pytest.fixture
def signed_event():
    """Devuelve (payload, signature) para un evento Stripe."""

    def _build(event_type: str, obj: dict, event_id: str = "evt_test_1") -> tuple[str, str]:
        payload = stripe_event(event_type, obj, event_id)
        return payload, stripe_signature(payload)

    return _build
