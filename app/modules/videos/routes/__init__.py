# -*- coding: utf-8 -*-
"""
app/modules/videos/routes/__init__.py
"""

from .videos import router

__all__ = ["router"]
