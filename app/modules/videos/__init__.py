# -*- coding: utf-8 -*-
"""
app/modules/videos/__init__.py

Módulo de jobs de generación de video.

Estructura:
- enums: VideoService, VideoJobStatus
- models: VideoLog
- repositories: VideoLogRepository
- services: VideoJobService (cobro, generación, sondeo y cancelación)
- routes: /api/videos

Fecha: 17/10/2026
"""

__all__: list[str] = []
