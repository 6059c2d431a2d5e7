# -*- coding: utf-8 -*-
"""
app/modules/videos/enums/__init__.py

Enums del módulo Videos.
"""

from .video_job_status_enum import VideoJobStatus
from .video_service_enum import VideoService

__all__ = ["VideoJobStatus", "VideoService"]
