# -*- coding: utf-8 -*-
"""
Autenticación Bearer: emisión/validación de JWT y dependencia de usuario.
"""

from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from app.shared.config import get_settings
from app.shared.utils.http_exceptions import UnauthorizedError
from app.modules.auth.dependencies import TEST_MODE_USER_ID, get_current_user_id, validate_jwt_token
from app.modules.auth.security import TokenDecodeError, create_access_token, decode_access_token


def test_token_round_trip():
    token = create_access_token(42, role="user")
    payload = decode_access_token(token)
    assert payload["sub"] == "42"
    assert payload["role"] == "user"
    assert validate_jwt_token(token) == 42


def test_expired_token_is_rejected():
    token = create_access_token(42, expires_delta=timedelta(seconds=-5))
    with pytest.raises(TokenDecodeError):
        decode_access_token(token)
    with pytest.raises(UnauthorizedError) as exc_info:
        validate_jwt_token(token)
    assert exc_info.value.status_code == 401


def test_token_signed_with_other_key_is_rejected():
    forged = jwt.encode({"sub": "42"}, "another-secret-key-of-sufficient-length", algorithm="HS256")
    with pytest.raises(UnauthorizedError):
        validate_jwt_token(forged)


def test_non_numeric_subject_is_rejected():
    token = create_access_token("alice")
    with pytest.raises(UnauthorizedError) as exc_info:
        validate_jwt_token(token)
    assert exc_info.value.message == "Token does not contain a valid user identifier"


async def test_missing_credentials():
    with pytest.raises(UnauthorizedError):
        await get_current_user_id(None)


async def test_test_mode_resolves_fixed_user(monkeypatch):
    monkeypatch.setattr(get_settings(), "test_mode", True)
    assert await get_current_user_id(None) == TEST_MODE_USER_ID


async def test_bearer_token_through_the_api(app, db_engine, user):
    token = create_access_token(user.id)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as anon:
        ok = await anon.get("/api/credits", headers={"Authorization": f"Bearer {token}"})
        bad = await anon.get("/api/credits", headers={"Authorization": "Bearer not-a-jwt"})

    assert ok.status_code == 200
    assert ok.json()["data"]["currentBalance"] == 100
    assert bad.status_code == 401
    assert bad.json()["success"] is False
