# -*- coding: utf-8 -*-
"""
app/modules/auth/security.py

Seguridad de la API:
- Esquema Bearer para extraer el token de Authorization
- Creación / decodificación de JWT (python-jose)

El login OAuth vive fuera de este servicio; el colaborador de identidad
emite tokens con create_access_token(user.id).

Fecha: 17/10/2026
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from fastapi.security import HTTPBearer
from jose import JWTError, jwt

from app.shared.config import get_settings

# auto_error=False: la ausencia de token la decide la dependencia (TEST_MODE)
bearer_scheme = HTTPBearer(auto_error=False)


class TokenDecodeError(Exception):
    """Error al decodificar/validar un token JWT."""


def _jwt_config() -> tuple[str, str, int]:
    settings = get_settings()
    return (
        settings.jwt_secret_key.get_secret_value(),
        settings.jwt_algorithm,
        settings.access_token_expire_minutes,
    )


def create_access_token(
    subject: Union[str, int],
    expires_delta: Optional[timedelta] = None,
    **extra: Any,
) -> str:
    """
    Crea un JWT con claim 'sub' (id numérico del usuario) y metadatos
    opcionales en `extra`.
    """
    secret_key, algorithm, expire_minutes = _jwt_config()
    now = datetime.now(tz=timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=expire_minutes))
    to_encode: Dict[str, Any] = {"sub": str(subject), "iat": int(now.timestamp()), "exp": int(expire.timestamp())}
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decodifica y valida un JWT. Lanza TokenDecodeError si es inválido/expirado.
    """
    secret_key, algorithm, _ = _jwt_config()
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError as e:
        raise TokenDecodeError("Token inválido o expirado") from e

    sub = payload.get("sub")
    if sub is None or not str(sub).strip():
        raise TokenDecodeError("Token sin 'sub'")
    return payload


__all__ = ["bearer_scheme", "TokenDecodeError", "create_access_token", "decode_access_token"]
# Fin del archivo app/modules/auth/security.py
