# -*- coding: utf-8 -*-
"""
app/__init__.py

Paquete principal del backend: ledger de créditos, liquidación de pagos
y jobs de generación de video.
"""
