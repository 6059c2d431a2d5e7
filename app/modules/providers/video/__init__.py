# -*- coding: utf-8 -*-
"""
app/modules/providers/video/__init__.py

Proveedores de generación de video.
"""

from .base import VideoProvider, validate_video_params
from .factory import (
    BUILTIN_VIDEO_PROVIDERS,
    get_video_provider,
    register_builtin_video_providers,
    video_providers,
)
from .heygen import HeyGenProvider
from .kie import KieProvider
from .veo3 import Veo3Provider

__all__ = [
    "BUILTIN_VIDEO_PROVIDERS",
    "HeyGenProvider",
    "KieProvider",
    "Veo3Provider",
    "VideoProvider",
    "get_video_provider",
    "register_builtin_video_providers",
    "validate_video_params",
    "video_providers",
]
