# -*- coding: utf-8 -*-
"""
app/modules/videos/schemas/__init__.py
"""

from .video_schemas import (
    CreateVideoRequest,
    VideoCancelled,
    VideoDownload,
    VideoJobAccepted,
    VideoList,
    VideoOut,
)

__all__ = [
    "CreateVideoRequest",
    "VideoCancelled",
    "VideoDownload",
    "VideoJobAccepted",
    "VideoList",
    "VideoOut",
]
