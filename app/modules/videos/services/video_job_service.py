# -*- coding: utf-8 -*-
"""
app/modules/videos/services/video_job_service.py

Ciclo de vida de los jobs de generación de video.

    PENDING -> PROCESSING -> COMPLETED | FAILED | CANCELLED

Flujo de creación:
1. Resolver proveedor y validar sus parámetros (sin red, sin cobro).
2. Registrar el job PENDING y cobrar su costo en el ledger.
3. Llamar a generate(); aceptado -> PROCESSING con el id del proveedor.
4. Rechazado -> FAILED + reembolso + UpstreamProviderError. La ruta hace
   commit antes de responder para que el reembolso quede persistido.

El refresco de estado solo aplica a jobs PROCESSING y usa un UPDATE
condicionado al estado, así que nunca pisa un estado terminal.

Igual que WalletService, este servicio no hace commit.

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_credits import CreditsSettings, get_credits_settings
from app.shared.utils.http_exceptions import (
    ProviderNotImplementedError,
    UpstreamProviderError,
    ValidationError,
    VideoNotFoundError,
    VideoStateError,
)
from app.modules.payments.services import WalletService
from app.modules.providers.registry import ProviderRegistry
from app.modules.providers.video import VideoProvider, video_providers
from app.modules.videos.enums import VideoJobStatus, VideoService
from app.modules.videos.models.video_log_models import VideoLog
from app.modules.videos.repositories.video_log_repository import VideoLogRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _failure_message(result: Mapping[str, Any]) -> str:
    error = result.get("error") or {}
    return error.get("message") or "Video generation request failed"


class VideoJobService:
    """Orquesta proveedor de video, ledger de créditos y video_logs."""

    def __init__(
        self,
        video_repo: VideoLogRepository,
        wallet_service: WalletService,
        registry: Optional[ProviderRegistry[VideoProvider]] = None,
        settings: Optional[CreditsSettings] = None,
    ) -> None:
        self.video_repo = video_repo
        self.wallet_service = wallet_service
        self.registry = registry or video_providers
        self.settings = settings or get_credits_settings()

    # ---------------------------------------------------------
    # Creación
    # ---------------------------------------------------------
    async def create_job(
        self,
        session: AsyncSession,
        *,
        user_id: int,
        service: str,
        params: Mapping[str, Any],
    ) -> VideoLog:
        provider = self.registry.create(service)
        if not isinstance(params, Mapping):
            raise ValidationError("params must be an object", fields=["params"])
        provider.validate_input(params)

        video_service = VideoService.from_provider_name(provider.name)
        cost = self.settings.cost_for(provider.name)

        job = await self.video_repo.create(
            session,
            user_id=user_id,
            service=video_service,
            status=VideoJobStatus.PENDING,
            request_params=dict(params),
            credits_consumed=cost,
        )
        # InsufficientCreditsError aborta antes de tocar al proveedor
        await self.wallet_service.deduct(
            session,
            user_id,
            cost,
            operation_code="video_generation",
            description=f"Video generation with {provider.name}",
            video_id=job.id,
        )

        result = await provider.generate(params)
        data = result.get("data") or {}
        provider_job_id = data.get("video_id")

        if not result.get("success") or not provider_job_id:
            message = (
                _failure_message(result)
                if not result.get("success")
                else "Provider response did not include a job id"
            )
            await self._fail_and_refund(session, job, message)
            error = result.get("error") or {}
            raise UpstreamProviderError(
                message,
                provider=provider.name,
                upstream_status=error.get("status"),
                code=error.get("code"),
            )

        job.provider_job_id = str(provider_job_id)
        job.status = VideoJobStatus.PROCESSING
        await session.flush()

        logger.info(
            "Video job accepted video_id=%s user_id=%s provider=%s provider_job_id=%s credits=%d",
            job.id, user_id, provider.name, job.provider_job_id, cost,
        )
        return job

    async def _fail_and_refund(self, session: AsyncSession, job: VideoLog, message: str) -> None:
        job.status = VideoJobStatus.FAILED
        job.error_message = message
        job.completed_at = _utcnow()
        await session.flush()

        await self.wallet_service.add(
            session,
            job.user_id,
            job.credits_consumed,
            operation_code="video_refund",
            description="Refund for failed video generation",
            video_id=job.id,
        )
        logger.warning(
            "Video job failed at submission video_id=%s user_id=%s refunded=%d error=%s",
            job.id, job.user_id, job.credits_consumed, message,
        )

    # ---------------------------------------------------------
    # Consulta
    # ---------------------------------------------------------
    async def list_jobs(
        self,
        session: AsyncSession,
        user_id: int,
        *,
        page: int = 1,
        limit: int = 10,
        service: Optional[VideoService] = None,
        status: Optional[VideoJobStatus] = None,
    ) -> tuple[Sequence[VideoLog], int]:
        offset = (page - 1) * limit
        items = await self.video_repo.list_for_user(
            session, user_id, service=service, status=status, limit=limit, offset=offset
        )
        total = await self.video_repo.count_for_user(session, user_id, service=service, status=status)
        return items, total

    async def get_job(
        self,
        session: AsyncSession,
        *,
        user_id: int,
        video_id: int,
        refresh: bool = True,
    ) -> VideoLog:
        """Job del usuario; si sigue PROCESSING se sincroniza con el proveedor."""
        job = await self.video_repo.get_for_user(session, video_id, user_id)
        if job is None:
            raise VideoNotFoundError(f"Video {video_id} not found", data={"video_id": video_id})
        if refresh and job.status == VideoJobStatus.PROCESSING and job.provider_job_id:
            await self.refresh_status(session, job)
        return job

    async def refresh_status(self, session: AsyncSession, job: VideoLog) -> bool:
        """
        Consulta el estado upstream y lo aplica si el job sigue PROCESSING.

        Returns:
            True si el estado local cambió.
        """
        provider = self.registry.create(job.service.provider_name)
        try:
            result = await provider.get_status(job.provider_job_id)
        except ProviderNotImplementedError:
            return False

        if not result.get("success"):
            logger.warning(
                "Status refresh failed video_id=%s provider=%s error=%s",
                job.id, provider.name, _failure_message(result),
            )
            return False

        data = result.get("data") or {}
        new_status = provider.map_status(data.get("status"))
        if new_status is None or new_status in (VideoJobStatus.PENDING, VideoJobStatus.PROCESSING):
            return False

        values: dict[str, Any] = {"status": new_status, "completed_at": _utcnow()}
        if new_status == VideoJobStatus.COMPLETED:
            values["video_url"] = data.get("video_url")
            if data.get("duration") is not None:
                values["duration"] = float(data["duration"])
        elif new_status == VideoJobStatus.FAILED:
            values["error_message"] = data.get("error_message") or "Video generation failed"

        changed = await self.video_repo.update_if_status(
            session, job.id, expected=VideoJobStatus.PROCESSING, **values
        )
        await session.refresh(job)
        if changed:
            logger.info("Video job updated video_id=%s status=%s", job.id, job.status)
        return changed

    async def get_download_url(self, session: AsyncSession, *, user_id: int, video_id: int) -> str:
        job = await self.get_job(session, user_id=user_id, video_id=video_id)
        if job.status != VideoJobStatus.COMPLETED or not job.video_url:
            raise VideoStateError(
                "Video is not ready for download",
                data={"video_id": job.id, "status": job.status.value},
            )
        logger.info("Video download requested video_id=%s user_id=%s", job.id, user_id)
        return job.video_url

    # ---------------------------------------------------------
    # Cancelación
    # ---------------------------------------------------------
    async def cancel_job(self, session: AsyncSession, *, user_id: int, video_id: int) -> VideoLog:
        """
        Solo jobs PROCESSING. La cancelación upstream es orientativa: el job
        queda CANCELLED aunque el proveedor no la confirme. No hay reembolso.
        """
        job = await self.get_job(session, user_id=user_id, video_id=video_id, refresh=False)
        if job.status != VideoJobStatus.PROCESSING:
            raise VideoStateError(
                "Can only cancel processing videos",
                data={"video_id": job.id, "status": job.status.value},
            )

        provider = self.registry.create(job.service.provider_name)
        if provider.supports_cancel and job.provider_job_id:
            result = await provider.cancel(job.provider_job_id)
            if not result.get("success"):
                logger.warning(
                    "Upstream cancel not confirmed video_id=%s provider=%s error=%s",
                    job.id, provider.name, _failure_message(result),
                )

        changed = await self.video_repo.update_if_status(
            session,
            job.id,
            expected=VideoJobStatus.PROCESSING,
            status=VideoJobStatus.CANCELLED,
            completed_at=_utcnow(),
        )
        await session.refresh(job)
        if not changed:
            raise VideoStateError(
                "Can only cancel processing videos",
                data={"video_id": job.id, "status": job.status.value},
            )

        logger.info("Video job cancelled video_id=%s user_id=%s", job.id, user_id)
        return job


__all__ = ["VideoJobService"]

# Fin del archivo app/modules/videos/services/video_job_service.py
