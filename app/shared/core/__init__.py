# -*- coding: utf-8 -*-
"""
app/shared/core/__init__.py

Recursos compartidos: cliente HTTP global y reintentos con backoff.
"""

from .http_client_cache import close_http_client, get_http_client
from .http_retry_utils import (
    RetryExhaustedError,
    RetryPolicy,
    execute_request,
    is_retryable_error,
    retry_with_backoff,
)

__all__ = [
    "close_http_client",
    "get_http_client",
    "RetryExhaustedError",
    "RetryPolicy",
    "execute_request",
    "is_retryable_error",
    "retry_with_backoff",
]
