# -*- coding: utf-8 -*-
"""
app/modules/videos/repositories/__init__.py
"""

from .video_log_repository import VideoLogRepository

__all__ = ["VideoLogRepository"]
