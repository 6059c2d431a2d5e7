# -*- coding: utf-8 -*-
"""
app/shared/__init__.py

Infraestructura compartida: configuración, base de datos, reintentos HTTP,
middlewares y utilidades de respuesta.
"""
