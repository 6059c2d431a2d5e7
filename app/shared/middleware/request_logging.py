# -*- coding: utf-8 -*-
"""
app/shared/middleware/request_logging.py

Middleware para logging de requests HTTP con método, path, status y duración.

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
import re
import time
from typing import Callable, List, Optional, Pattern

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .exception_handler import get_request_id

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Loguea el fin de cada request con request_id, status y duración.

    Los webhooks se loguean igual que el resto; el body nunca se registra.
    """

    DEFAULT_EXCLUDE = [
        re.compile(r"^/health"),
        re.compile(r"^/favicon\.ico"),
    ]

    def __init__(self, app, exclude_patterns: Optional[List[Pattern]] = None):
        super().__init__(app)
        self.exclude_patterns = exclude_patterns or self.DEFAULT_EXCLUDE

    def _should_log(self, path: str) -> bool:
        return not any(pattern.match(path) for pattern in self.exclude_patterns)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if not self._should_log(path):
            return await call_next(request)

        request_id = getattr(request.state, "request_id", None) or get_request_id(request)
        request.state.request_id = request_id

        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            # 5xx a WARNING para que destaquen con LOG_LEVEL=WARNING
            level = logging.WARNING if status >= 500 else logging.INFO
            logger.log(
                level,
                "request_completed %s %s -> %d (%.2f ms)",
                request.method,
                path,
                status,
                duration_ms,
                extra={
                    "request_id": request_id,
                    "http_status": status,
                    "duration_ms": duration_ms,
                },
            )


__all__ = ["RequestLoggingMiddleware"]
# Fin del archivo app/shared/middleware/request_logging.py
