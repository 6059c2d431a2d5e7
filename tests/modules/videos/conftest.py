# -*- coding: utf-8 -*-
"""
Fixtures de videos: proveedor Kie/HeyGen contra un upstream simulado.
"""

import json

import httpx
import pytest

from app.shared.core.http_retry_utils import RetryPolicy
from app.modules.payments.dependencies import get_wallet_service
from app.modules.providers.registry import ProviderRegistry
from app.modules.providers.video import HeyGenProvider, KieProvider
from app.modules.videos.dependencies import get_video_job_service
from app.modules.videos.repositories import VideoLogRepository
from app.modules.videos.services import VideoJobService


class FakeVideoUpstream:
    """
    API de video en memoria. `state` controla lo que devuelve el sondeo;
    `fail_generate` hace que la creación responda 500.
    """

    def __init__(self):
        self.state = {"status": "processing"}
        self.fail_generate = False
        self.requests: list[httpx.Request] = []
        self._counter = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/generate") or path.endswith("/video/generate"):
            if self.fail_generate:
                return httpx.Response(500, json={"error": "upstream exploded"})
            self._counter += 1
            job_id = f"job_{self._counter}"
            return httpx.Response(200, json={"id": job_id, "video_id": job_id, "status": "queued"})
        if "/cancel/" in path:
            return httpx.Response(200, json={"cancelled": True})
        if "/status/" in path:
            return httpx.Response(200, json={"id": path.rsplit("/", 1)[-1], **self.state})
        return httpx.Response(404, json={"error": "not found"})

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.path}" for r in self.requests]

    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def upstream():
    return FakeVideoUpstream()


@pytest.fixture
def video_registry(upstream):
    client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    policy = RetryPolicy(max_attempts=1, initial_delay_ms=0, max_delay_ms=0)

    def _factory(cls, endpoint):
        def _build(name=None, config=None, **kwargs):
            return cls(
                name,
                {"api_key": "test-key", "endpoint": endpoint},
                client=client,
                retry_policy=policy,
                include_raw=False,
            )
        return _build

    registry = ProviderRegistry("video")
    registry.register("kie", _factory(KieProvider, "https://kie.test/v1"))
    registry.register("heygen", _factory(HeyGenProvider, "https://heygen.test/v2"))
    return registry


@pytest.fixture
def video_service(wallet_service, video_registry):
    return VideoJobService(VideoLogRepository(), wallet_service, registry=video_registry)


@pytest.fixture
def use_fake_videos(app, video_registry):
    """Hace que las rutas /api/videos usen el registro simulado."""

    def _service():
        return VideoJobService(VideoLogRepository(), get_wallet_service(), registry=video_registry)

    app.dependency_overrides[get_video_job_service] = _service
    yield
    app.dependency_overrides.pop(get_video_job_service, None)
