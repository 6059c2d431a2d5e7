# -*- coding: utf-8 -*-
"""
app/modules/auth/services/__init__.py
"""

from .user_service import UserService

__all__ = ["UserService"]
