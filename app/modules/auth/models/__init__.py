# -*- coding: utf-8 -*-
"""
app/modules/auth/models/__init__.py

Modelos ORM del módulo de autenticación.
"""

from .user_models import User

__all__ = ["User"]
