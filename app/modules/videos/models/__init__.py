# -*- coding: utf-8 -*-
"""
app/modules/videos/models/__init__.py

Modelos ORM del módulo Videos. User primero para resolver la FK.
"""

from app.modules.auth.models.user_models import User  # noqa: F401

from .video_log_models import VideoLog

__all__ = ["VideoLog"]
