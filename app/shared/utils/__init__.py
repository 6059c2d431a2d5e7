# -*- coding: utf-8 -*-
"""
app/shared/utils/__init__.py

Utilidades compartidas de la API: modelos base Pydantic y excepciones HTTP.
Se importan desde su submódulo (base_models, http_exceptions).
"""
