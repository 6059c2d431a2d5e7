# -*- coding: utf-8 -*-
"""
app/shared/middleware/exception_handler.py

Traducción de excepciones a respuestas JSON.

- AppError y subclases -> {"success": false, "error", "message", "data"?}
- Errores de validación de FastAPI -> 400 con la lista de campos inválidos
- HTTPException -> mismo sobre
- Cualquier otra excepción -> 500 con request_id (JSONExceptionMiddleware)

La traza solo se adjunta (campo "stack") con DEBUG fuera de producción.

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
import traceback
import uuid
from typing import Any, Callable

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.shared.config import get_settings
from app.shared.utils.http_exceptions import AppError

logger = logging.getLogger(__name__)

REQUEST_ID_HEADERS = ["x-request-id", "x-correlation-id"]


def get_request_id(request: Request) -> str:
    """Extrae request_id de headers o genera uno nuevo."""
    for header in REQUEST_ID_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return uuid.uuid4().hex[:16]


def _with_stack(payload: dict[str, Any], exc: BaseException) -> dict[str, Any]:
    if get_settings().expose_stack_traces:
        payload["stack"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return payload


class JSONExceptionMiddleware(BaseHTTPMiddleware):
    """
    Captura excepciones no manejadas y devuelve JSON 500.

    Garantiza Content-Type application/json y request_id para
    correlación de logs.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = get_request_id(request)
        request.state.request_id = request_id

        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "unhandled_exception request_id=%s method=%s path=%s error=%r",
                request_id,
                request.method,
                request.url.path,
                e,
            )
            content = _with_stack(
                {
                    "success": False,
                    "error": "Internal Server Error",
                    "message": "An unexpected error occurred",
                    "request_id": request_id,
                },
                e,
            )
            return JSONResponse(
                status_code=500,
                content=content,
                headers={"X-Request-ID": request_id},
            )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logger.log(
        level,
        "app_error status=%s error=%s path=%s message=%s",
        exc.status_code,
        exc.error,
        request.url.path,
        exc.message,
    )
    payload = exc.to_payload()
    if exc.status_code >= 500:
        payload = _with_stack(payload, exc)
    return JSONResponse(status_code=exc.status_code, content=payload, headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    fields: list[str] = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "header")]
        name = ".".join(loc) or "body"
        if name not in fields:
            fields.append(name)
    message = "Invalid fields: " + ", ".join(fields) if fields else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Validation Error",
            "message": message,
            "data": {
                "fields": fields,
                "details": [
                    {"field": ".".join(str(p) for p in e.get("loc", ())), "message": e.get("msg")}
                    for e in errors
                ],
            },
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        content: dict[str, Any] = {
            "success": False,
            "error": "Not Found",
            "message": f"Route {request.method} {request.url.path} not found",
            "path": request.url.path,
        }
    elif isinstance(exc.detail, dict):
        content = {"success": False, **exc.detail}
        content.setdefault("error", "HTTP Error")
    else:
        content = {"success": False, "error": str(exc.detail), "message": str(exc.detail)}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registra los manejadores JSON de errores en la app."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]


__all__ = [
    "JSONExceptionMiddleware",
    "get_request_id",
    "register_exception_handlers",
]
# Fin del archivo app/shared/middleware/exception_handler.py
