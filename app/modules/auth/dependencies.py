# -*- coding: utf-8 -*-
"""
app/modules/auth/dependencies.py

Dependencias de autenticación JWT para FastAPI.

Provee:
- validate_jwt_token: valida el token y devuelve el user_id numérico
- get_current_user_id: dependencia para endpoints protegidos

Con TEST_MODE activo toda petición se resuelve al usuario 1.

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials

from app.shared.config import get_settings
from app.shared.utils.http_exceptions import UnauthorizedError

from .security import TokenDecodeError, bearer_scheme, decode_access_token

logger = logging.getLogger(__name__)

TEST_MODE_USER_ID = 1


def validate_jwt_token(token: str) -> int:
    """
    Valida un JWT y extrae el user_id (claim 'sub').

    Raises:
        UnauthorizedError: Si el token es inválido, expirado o su 'sub' no es numérico.
    """
    try:
        payload = decode_access_token(token)
    except TokenDecodeError as e:
        raise UnauthorizedError(str(e)) from e

    try:
        return int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise UnauthorizedError("Token does not contain a valid user identifier") from e


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> int:
    """
    Dependencia de autenticación para endpoints protegidos.

    Extrae y valida el JWT del header Authorization: Bearer <token>.
    """
    if get_settings().test_mode:
        return TEST_MODE_USER_ID

    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication required")

    return validate_jwt_token(credentials.credentials)


__all__ = ["get_current_user_id", "validate_jwt_token", "TEST_MODE_USER_ID"]
# Fin del archivo app/modules/auth/dependencies.py
