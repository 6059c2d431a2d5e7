# -*- coding: utf-8 -*-
"""
app/shared/config/logging_config.py

Logging de la API vía dictConfig. Un solo handler a stdout:
texto legible en desarrollo, JSON (python-json-logger) en producción
para que los campos `extra` (request_id, video_id, payment_id...) lleguen
como claves propias.

Fecha: 17/10/2026
"""

import logging.config
from typing import Any, Dict, Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["plain", "pretty", "json"]

# Librerías que en INFO registran cada llamada saliente o cada sentencia
_QUIET_LOGGERS = ("httpx", "httpcore", "stripe", "sqlalchemy.engine")


def build_logging_config(level: LogLevel, fmt: LogFormat, sql_echo: bool = False) -> Dict[str, Any]:
    """Diccionario para logging.config.dictConfig; `pretty` se trata como `plain`."""
    formatter = "json" if fmt == "json" else "plain"
    loggers = {name: {"level": "WARNING"} for name in _QUIET_LOGGERS}
    if sql_echo:
        loggers["sqlalchemy.engine"] = {"level": "INFO"}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"format": "%(asctime)s %(levelname)s [%(name)s]: %(message)s"},
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": loggers,
        "root": {"handlers": ["stdout"], "level": level.upper()},
    }


def setup_logging(level: LogLevel = "INFO", fmt: LogFormat = "plain", sql_echo: bool = False) -> None:
    """
    Aplica la configuración de logging al proceso.

    Ejemplos:
        >>> setup_logging("INFO", "plain")
        >>> setup_logging("WARNING", "json")
    """
    logging.config.dictConfig(build_logging_config(level, fmt, sql_echo))


__all__ = ["setup_logging", "build_logging_config"]
# Fin del archivo app/shared/config/logging_config.py
