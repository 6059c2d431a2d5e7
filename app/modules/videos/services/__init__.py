# -*- coding: utf-8 -*-
"""
app/modules/videos/services/__init__.py
"""

from .video_job_service import VideoJobService

__all__ = ["VideoJobService"]
