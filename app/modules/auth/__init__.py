# -*- coding: utf-8 -*-
"""
app/modules/auth/__init__.py

Autenticación de la API.

El login OAuth lo resuelve un colaborador externo; aquí viven:
- models: User
- security: emisión/decodificación de JWT (python-jose)
- dependencies: get_current_user_id para endpoints protegidos
- services: UserService (alta de usuarios + wallet inicial)

No se importan submódulos aquí para que los modelos de otros módulos
puedan importar User sin arrastrar servicios.

Fecha: 17/10/2026
"""

__all__: list[str] = []

# Fin del archivo app/modules/auth/__init__.py
