# -*- coding: utf-8 -*-
"""
Sobre JSON de errores: AppError, validación, 404 y excepciones no manejadas.
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, Field

from app.shared.middleware import (
    JSONExceptionMiddleware,
    RequestLoggingMiddleware,
    register_exception_handlers,
)
from app.shared.utils.http_exceptions import (
    InsufficientCreditsError,
    ProviderUnsupportedError,
    UnauthorizedError,
    UpstreamProviderError,
)


class _Body(BaseModel):
    credits: int = Field(gt=0)
    reason: str


def _build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(JSONExceptionMiddleware)
    register_exception_handlers(app)

    @app.get("/insufficient")
    async def insufficient():
        raise InsufficientCreditsError(required=200, available=120)

    @app.get("/unsupported")
    async def unsupported():
        raise ProviderUnsupportedError("Unsupported video provider: 'foo'", available=["heygen", "kie"])

    @app.get("/upstream")
    async def upstream():
        raise UpstreamProviderError("HeyGen failed after 3 attempts", provider="heygen", upstream_status=503)

    @app.get("/auth")
    async def auth():
        raise UnauthorizedError(headers={"WWW-Authenticate": "Bearer"})

    @app.post("/validate")
    async def validate(body: _Body):
        return {"ok": True}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("unexpected")

    return app


@pytest.fixture
async def client():
    transport = ASGITransport(app=_build_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


@pytest.mark.asyncio
async def test_insufficient_credits_payload(client):
    resp = await client.get("/insufficient")
    assert resp.status_code == 402
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == "Insufficient credits"
    assert body["data"] == {"required": 200, "available": 120, "shortage": 80}


@pytest.mark.asyncio
async def test_unsupported_provider_lists_available(client):
    resp = await client.get("/unsupported")
    assert resp.status_code == 400
    assert resp.json()["data"]["available"] == ["heygen", "kie"]


@pytest.mark.asyncio
async def test_upstream_error_is_502(client):
    resp = await client.get("/upstream")
    assert resp.status_code == 502
    body = resp.json()
    assert body["data"] == {"provider": "heygen", "upstream_status": 503}
    assert "stack" not in body


@pytest.mark.asyncio
async def test_unauthorized_carries_www_authenticate(client):
    resp = await client.get("/auth")
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"
    assert resp.json()["message"] == "Authentication required"


@pytest.mark.asyncio
async def test_request_validation_lists_every_field(client):
    resp = await client.post("/validate", json={"credits": 0})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Validation Error"
    assert set(body["data"]["fields"]) == {"credits", "reason"}


@pytest.mark.asyncio
async def test_unknown_route_is_json_404(client):
    resp = await client.get("/nope")
    assert resp.status_code == 404
    assert resp.json() == {
        "success": False,
        "error": "Not Found",
        "message": "Route GET /nope not found",
        "path": "/nope",
    }


@pytest.mark.asyncio
async def test_unhandled_exception_is_json_500(client):
    resp = await client.get("/boom", headers={"X-Request-ID": "req-123"})
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Internal Server Error"
    assert body["request_id"] == "req-123"
    assert "stack" not in body
