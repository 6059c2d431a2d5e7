# -*- coding: utf-8 -*-
"""
VideoJobService: cobro, reembolso ante rechazo y sincronización de estado.
"""

import pytest

from app.shared.utils.http_exceptions import (
    InsufficientCreditsError,
    ProviderUnsupportedError,
    UpstreamProviderError,
    ValidationError,
    VideoNotFoundError,
    VideoStateError,
)
from app.modules.payments.enums import CreditTxType
from app.modules.videos.enums import VideoJobStatus, VideoService
from tests.conftest import create_user

KIE_PARAMS = {"prompt": "A sunset over the sea", "duration": 5}


async def _start(session, video_service, user, service="kie", params=KIE_PARAMS):
    return await video_service.create_job(session, user_id=user.id, service=service, params=params)


async def test_create_job_charges_and_submits(session, video_service, wallet_service, user, upstream):
    job = await _start(session, video_service, user)

    assert job.status == VideoJobStatus.PROCESSING
    assert job.service == VideoService.KIE
    assert job.provider_job_id == "job_1"
    assert job.credits_consumed == 5
    assert job.request_params == KIE_PARAMS
    assert upstream.paths() == ["POST /v1/generate"]
    assert upstream.last_json()["prompt"] == "A sunset over the sea"

    assert await wallet_service.get_balance(session, user.id) == 95
    items, _ = await wallet_service.history(session, user.id, limit=5)
    assert items[0].tx_type == CreditTxType.DEBIT
    assert items[0].video_id == job.id
    assert items[0].operation_code == "video_generation"


async def test_service_name_is_case_insensitive(session, video_service, user):
    job = await _start(session, video_service, user, service="  KIE ")
    assert job.service == VideoService.KIE


async def test_upstream_rejection_refunds(session, video_service, wallet_service, user, upstream):
    upstream.fail_generate = True

    with pytest.raises(UpstreamProviderError) as exc_info:
        await _start(session, video_service, user)

    err = exc_info.value
    assert err.status_code == 502
    assert err.provider == "kie"
    assert err.upstream_status == 500

    assert await wallet_service.get_balance(session, user.id) == 100
    items, total = await wallet_service.history(session, user.id, limit=5)
    assert total == 2
    assert items[0].operation_code == "video_refund"
    assert items[0].credits_delta == 5

    jobs, _ = await video_service.list_jobs(session, user.id)
    assert jobs[0].status == VideoJobStatus.FAILED
    assert jobs[0].error_message
    assert jobs[0].completed_at is not None


async def test_insufficient_credits_never_calls_provider(session, video_service, wallet_service, upstream):
    poor = await create_user(session, wallet_service, email="poor@example.com", balance=3)

    with pytest.raises(InsufficientCreditsError) as exc_info:
        await _start(session, video_service, poor)

    assert exc_info.value.data == {"required": 5, "available": 3, "shortage": 2}
    assert upstream.requests == []


async def test_unknown_service_and_bad_params(session, video_service, wallet_service, user, upstream):
    with pytest.raises(ProviderUnsupportedError) as exc_info:
        await _start(session, video_service, user, service="sora")
    assert exc_info.value.available == ["kie", "heygen"]

    with pytest.raises(ValidationError) as exc_info:
        await _start(session, video_service, user, params={"duration": 5})
    assert exc_info.value.fields == ["prompt"]

    with pytest.raises(ValidationError) as exc_info:
        await _start(session, video_service, user, params={"prompt": "   ", "duration": 5})
    assert exc_info.value.fields == ["prompt"]

    with pytest.raises(ValidationError):
        await _start(session, video_service, user, params=["prompt"])

    assert upstream.requests == []
    assert await wallet_service.get_balance(session, user.id) == 100


async def test_get_job_refreshes_until_completed(session, video_service, user, upstream):
    job = await _start(session, video_service, user)

    still_running = await video_service.get_job(session, user_id=user.id, video_id=job.id)
    assert still_running.status == VideoJobStatus.PROCESSING

    upstream.state = {"status": "succeeded", "url": "https://kie.test/job_1.mp4", "duration": 5}
    done = await video_service.get_job(session, user_id=user.id, video_id=job.id)
    assert done.status == VideoJobStatus.COMPLETED
    assert done.video_url == "https://kie.test/job_1.mp4"
    assert done.duration == 5.0
    assert done.completed_at is not None

    calls = len(upstream.requests)
    await video_service.get_job(session, user_id=user.id, video_id=job.id)
    assert len(upstream.requests) == calls


async def test_async_failure_keeps_credits_consumed(session, video_service, wallet_service, user, upstream):
    job = await _start(session, video_service, user)
    upstream.state = {"status": "failed"}

    failed = await video_service.get_job(session, user_id=user.id, video_id=job.id)

    assert failed.status == VideoJobStatus.FAILED
    assert failed.error_message == "Video generation failed"
    assert await wallet_service.get_balance(session, user.id) == 95


async def test_unrecognized_status_is_ignored(session, video_service, user, upstream):
    job = await _start(session, video_service, user)
    upstream.state = {"status": "mystery"}

    assert await video_service.refresh_status(session, job) is False
    assert job.status == VideoJobStatus.PROCESSING


async def test_stale_poll_does_not_overwrite_terminal_state(session, video_service, user, upstream):
    job = await _start(session, video_service, user)
    await video_service.cancel_job(session, user_id=user.id, video_id=job.id)

    upstream.state = {"status": "completed", "url": "https://kie.test/late.mp4"}
    job.status = VideoJobStatus.PROCESSING  # copia en memoria desactualizada

    assert await video_service.refresh_status(session, job) is False
    assert job.status == VideoJobStatus.CANCELLED
    assert job.video_url is None


async def test_download_requires_completed_video(session, video_service, user, upstream):
    job = await _start(session, video_service, user)

    with pytest.raises(VideoStateError) as exc_info:
        await video_service.get_download_url(session, user_id=user.id, video_id=job.id)
    assert exc_info.value.status_code == 400

    upstream.state = {"status": "completed", "url": "https://kie.test/job_1.mp4"}
    url = await video_service.get_download_url(session, user_id=user.id, video_id=job.id)
    assert url == "https://kie.test/job_1.mp4"


async def test_cancel_processing_job(session, video_service, wallet_service, user, upstream):
    job = await _start(session, video_service, user)

    cancelled = await video_service.cancel_job(session, user_id=user.id, video_id=job.id)

    assert cancelled.status == VideoJobStatus.CANCELLED
    assert "POST /v1/cancel/job_1" in upstream.paths()
    assert await wallet_service.get_balance(session, user.id) == 95

    with pytest.raises(VideoStateError):
        await video_service.cancel_job(session, user_id=user.id, video_id=job.id)


async def test_cancel_without_upstream_support_is_local(session, video_service, user, upstream):
    job = await _start(
        session,
        video_service,
        user,
        service="heygen",
        params={"avatar_id": "av", "voice_id": "vo", "script": "Hola"},
    )
    assert job.credits_consumed == 10

    cancelled = await video_service.cancel_job(session, user_id=user.id, video_id=job.id)

    assert cancelled.status == VideoJobStatus.CANCELLED
    assert not any("/cancel" in p for p in upstream.paths())


async def test_jobs_are_scoped_to_owner(session, video_service, user, other_user):
    job = await _start(session, video_service, user)

    with pytest.raises(VideoNotFoundError) as exc_info:
        await video_service.get_job(session, user_id=other_user.id, video_id=job.id)
    assert exc_info.value.status_code == 404

    jobs, total = await video_service.list_jobs(session, other_user.id)
    assert (list(jobs), total) == ([], 0)


async def test_list_jobs_pagination_and_filters(session, video_service, user, upstream):
    for _ in range(3):
        await _start(session, video_service, user)
    await _start(
        session, video_service, user, service="heygen",
        params={"avatar_id": "av", "voice_id": "vo", "script": "Hola"},
    )

    page, total = await video_service.list_jobs(session, user.id, page=2, limit=3)
    assert total == 4
    assert len(page) == 1

    heygen, heygen_total = await video_service.list_jobs(session, user.id, service=VideoService.HEYGEN)
    assert heygen_total == 1
    assert heygen[0].service == VideoService.HEYGEN

    _, completed = await video_service.list_jobs(session, user.id, status=VideoJobStatus.COMPLETED)
    assert completed == 0
