# -*- coding: utf-8 -*-
"""
Proveedores de video contra un transport simulado de httpx.
"""

import json

import httpx
import pytest

from app.shared.core.http_retry_utils import RetryPolicy
from app.shared.utils.http_exceptions import ValidationError
from app.modules.providers.video import HeyGenProvider, KieProvider, Veo3Provider
from app.modules.videos.enums import VideoJobStatus


class Upstream:
    """Registra los requests y responde con la función `handler`."""

    def __init__(self, handler):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    @property
    def last_json(self):
        return json.loads(self.requests[-1].content)


def make(cls, upstream, *, attempts=1, **config):
    base = {"api_key": "test-key", "endpoint": "https://upstream.test/v1", "timeout": 5}
    base.update(config)
    return cls(
        cls.provider_name,
        base,
        client=upstream.client(),
        retry_policy=RetryPolicy(max_attempts=attempts, initial_delay_ms=0, max_delay_ms=0),
        include_raw=False,
    )


HEYGEN_PARAMS = {"avatar_id": "av_1", "voice_id": "vo_1", "script": "Hola mundo"}


# ---------------------------------------------------------------
# HeyGen
# ---------------------------------------------------------------
async def test_heygen_generate_sends_avatar_payload():
    upstream = Upstream(lambda r: httpx.Response(200, json={"video_id": "hg_1", "status": "pending"}))
    provider = make(HeyGenProvider, upstream)

    result = await provider.generate({**HEYGEN_PARAMS, "title": "Demo"})

    assert result["success"] is True
    assert result["provider"] == "heygen"
    assert result["data"]["video_id"] == "hg_1"
    assert result["data"]["status"] == "pending"

    request = upstream.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://upstream.test/v1/video/generate"
    assert request.headers["X-Api-Key"] == "test-key"
    body = upstream.last_json
    assert body["title"] == "Demo"
    assert body["dimension"] == {"width": 1920, "height": 1080}
    video_input = body["video_inputs"][0]
    assert video_input["character"]["avatar_id"] == "av_1"
    assert video_input["voice"]["voice_id"] == "vo_1"
    assert video_input["input_text"] == "Hola mundo"


async def test_heygen_missing_fields_fail_before_network():
    upstream = Upstream(lambda r: httpx.Response(200, json={}))
    provider = make(HeyGenProvider, upstream)

    with pytest.raises(ValidationError) as exc_info:
        await provider.generate({"avatar_id": "av_1"})

    assert exc_info.value.fields == ["voice_id", "script"]
    assert upstream.requests == []


async def test_heygen_script_too_long():
    provider = make(HeyGenProvider, Upstream(lambda r: httpx.Response(200)))
    with pytest.raises(ValidationError):
        await provider.generate({**HEYGEN_PARAMS, "script": "x" * 10001})


async def test_heygen_status_maps_completed_video():
    upstream = Upstream(
        lambda r: httpx.Response(
            200,
            json={
                "video_id": "hg_1",
                "status": "completed",
                "data": {"video_url": "https://cdn.test/hg_1.mp4", "duration": 12.5},
            },
        )
    )
    provider = make(HeyGenProvider, upstream)

    result = await provider.get_status("hg_1")

    assert str(upstream.requests[0].url) == "https://upstream.test/v1/video/status/hg_1"
    assert result["data"]["video_url"] == "https://cdn.test/hg_1.mp4"
    assert result["data"]["duration"] == 12.5
    assert provider.map_status(result["data"]["status"]) is VideoJobStatus.COMPLETED


async def test_heygen_server_error_is_retried_then_normalized(no_sleep):
    upstream = Upstream(lambda r: httpx.Response(500, json={"error": "boom"}))
    provider = make(HeyGenProvider, upstream, attempts=3)

    result = await provider.generate(HEYGEN_PARAMS)

    assert len(upstream.requests) == 3
    assert result["success"] is False
    assert result["error"]["code"] == "RETRY_EXHAUSTED"
    assert result["error"]["status"] == 500


async def test_heygen_client_error_is_not_retried():
    upstream = Upstream(lambda r: httpx.Response(401, json={"error": "bad key"}))
    provider = make(HeyGenProvider, upstream, attempts=3)

    result = await provider.generate(HEYGEN_PARAMS)

    assert len(upstream.requests) == 1
    assert result["error"]["code"] == "HTTP_ERROR"
    assert result["error"]["status"] == 401


async def test_heygen_does_not_support_cancel():
    provider = make(HeyGenProvider, Upstream(lambda r: httpx.Response(200)))
    assert provider.supports_cancel is False


# ---------------------------------------------------------------
# Veo 3
# ---------------------------------------------------------------
async def test_veo3_generate_uses_model_path_and_project_header():
    upstream = Upstream(lambda r: httpx.Response(200, json={"name": "operations/op-1", "state": "running"}))
    provider = make(Veo3Provider, upstream, project_id="proj-1")

    result = await provider.generate({"prompt": "A cat surfing", "duration": 8, "aspect_ratio": "9:16"})

    request = upstream.requests[0]
    assert str(request.url) == "https://upstream.test/v1/models/veo-3:generate"
    assert request.headers["Authorization"] == "Bearer test-key"
    assert request.headers["x-goog-user-project"] == "proj-1"
    body = upstream.last_json
    assert body["prompt"] == {"text": "A cat surfing"}
    assert body["generationConfig"] == {"duration": 8, "aspectRatio": "9:16", "model": "veo-3"}
    assert result["data"]["video_id"] == "operations/op-1"
    assert provider.map_status(result["data"]["status"]) is VideoJobStatus.PROCESSING


@pytest.mark.parametrize(
    "params, field",
    [
        ({"prompt": "x", "duration": 0}, "duration"),
        ({"prompt": "x", "duration": 61}, "duration"),
        ({"prompt": "x", "aspect_ratio": "4:3"}, "aspect_ratio"),
        ({"prompt": "x" * 2001}, "prompt"),
    ],
)
async def test_veo3_common_rules(params, field):
    upstream = Upstream(lambda r: httpx.Response(200, json={}))
    provider = make(Veo3Provider, upstream)

    with pytest.raises(ValidationError) as exc_info:
        await provider.generate(params)

    assert field in exc_info.value.fields
    assert upstream.requests == []


async def test_veo3_status_done_with_video():
    payload = {
        "name": "operations/op-1",
        "done": True,
        "response": {"video": {"uri": "https://storage.test/op-1.mp4", "duration": 8}},
    }
    upstream = Upstream(lambda r: httpx.Response(200, json=payload))
    provider = make(Veo3Provider, upstream)

    result = await provider.get_status("operations/op-1")

    assert str(upstream.requests[0].url) == "https://upstream.test/v1/operations/op-1"
    assert result["data"]["status"] == "completed"
    assert result["data"]["video_url"] == "https://storage.test/op-1.mp4"
    assert result["data"]["duration"] == 8


async def test_veo3_status_done_with_error():
    payload = {"name": "operations/op-1", "done": True, "error": {"message": "quota"}}
    provider = make(Veo3Provider, Upstream(lambda r: httpx.Response(200, json=payload)))

    result = await provider.get_status("operations/op-1")

    assert result["data"]["status"] == "failed"
    assert result["data"]["error_message"] == "quota"
    assert provider.map_status("failed") is VideoJobStatus.FAILED


async def test_veo3_cancel_posts_cancel_suffix():
    upstream = Upstream(lambda r: httpx.Response(200, json={}))
    provider = make(Veo3Provider, upstream)

    result = await provider.cancel("operations/op-1")

    assert upstream.requests[0].method == "POST"
    assert str(upstream.requests[0].url) == "https://upstream.test/v1/operations/op-1:cancel"
    assert result["data"] == {"video_id": "operations/op-1", "cancelled": True}


def test_veo3_public_config_has_project_but_no_key():
    provider = Veo3Provider("veo3", {"api_key": "secret", "project_id": "proj-1"}, include_raw=False)
    config = provider.public_config()
    assert config["project_id"] == "proj-1"
    assert "secret" not in json.dumps(config)


# ---------------------------------------------------------------
# Kie
# ---------------------------------------------------------------
async def test_kie_generate_and_status():
    def handler(request):
        if request.url.path.endswith("/generate"):
            return httpx.Response(200, json={"id": "kie_1", "status": "queued"})
        return httpx.Response(
            200, json={"id": "kie_1", "status": "succeeded", "url": "https://kie.test/kie_1.mp4", "duration": 5}
        )

    upstream = Upstream(handler)
    provider = make(KieProvider, upstream)

    started = await provider.generate({"prompt": "Sunset", "seed": 7})
    assert started["data"]["video_id"] == "kie_1"
    assert upstream.last_json == {
        "prompt": "Sunset",
        "model": "veo3.1-fast",
        "duration": 5,
        "aspectRatio": "16:9",
        "seed": 7,
    }

    status = await provider.get_status("kie_1")
    assert str(upstream.requests[-1].url) == "https://upstream.test/v1/status/kie_1"
    assert provider.map_status(status["data"]["status"]) is VideoJobStatus.COMPLETED
    assert status["data"]["video_url"] == "https://kie.test/kie_1.mp4"


async def test_kie_cancel_and_network_failure():
    upstream = Upstream(lambda r: httpx.Response(200, json={"ok": True}))
    provider = make(KieProvider, upstream)
    result = await provider.cancel("kie_1")
    assert str(upstream.requests[0].url) == "https://upstream.test/v1/cancel/kie_1"
    assert result["data"]["cancelled"] is True

    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    down = make(KieProvider, Upstream(refuse), attempts=2)
    failed = await down.get_status("kie_1")
    assert failed["success"] is False
    assert failed["error"]["code"] == "RETRY_EXHAUSTED"
    assert "status" not in failed["error"]


def test_unknown_upstream_status_maps_to_none():
    provider = KieProvider("kie", {}, include_raw=False)
    assert provider.map_status("mystery") is None
    assert provider.map_status(None) is None
    assert provider.map_status(" CANCELED ") is VideoJobStatus.CANCELLED
