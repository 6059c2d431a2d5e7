# -*- coding: utf-8 -*-
"""
app/modules/auth/services/user_service.py

Servicio de usuarios para el colaborador de identidad (login OAuth).

- provision_from_identity: crea o actualiza el usuario a partir de una
  aserción verificada del proveedor de identidad y garantiza su wallet.
- ensure_user_wallet: crea la wallet con INITIAL_CREDITS si falta.

Como el resto de servicios, no hace commit.

Fecha: 17/10/2026
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.utils.http_exceptions import ValidationError
from app.modules.auth.models.user_models import User
from app.modules.auth.repositories import UserRepository
from app.modules.payments.models.wallet_models import Wallet
from app.modules.payments.services import WalletService

log = logging.getLogger(__name__)


def _mask_email(email: str) -> str:
    """Enmascara email para logging seguro: us***@dom***.com"""
    e = (email or "").strip().lower()
    if not e or "@" not in e:
        return "***@***.***"
    local, domain = e.split("@", 1)
    masked_local = f"{local[:2]}***" if len(local) >= 2 else "***"
    if "." in domain:
        dom_parts = domain.rsplit(".", 1)
        masked_domain = f"{dom_parts[0][:3]}***.{dom_parts[1]}"
    else:
        masked_domain = f"{domain[:3]}***"
    return f"{masked_local}@{masked_domain}"


class UserService:
    """Alta/actualización de usuarios provenientes del login externo."""

    def __init__(self, user_repo: UserRepository, wallet_service: WalletService) -> None:
        self.user_repo = user_repo
        self.wallet_service = wallet_service

    async def get_by_id(self, session: AsyncSession, user_id: int) -> Optional[User]:
        if not isinstance(user_id, int):
            return None
        return await self.user_repo.get(session, user_id)

    async def provision_from_identity(
        self,
        session: AsyncSession,
        *,
        email: str,
        google_id: Optional[str] = None,
        name: Optional[str] = None,
        image: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> tuple[User, bool]:
        """
        Busca por google_id y luego por email; si no existe lo crea.

        Returns:
            (usuario, creado)
        """
        norm_email = (email or "").strip().lower()
        if not norm_email or "@" not in norm_email:
            raise ValidationError("A valid email is required", fields=["email"])

        user = None
        if google_id:
            user = await self.user_repo.get_by_google_id(session, google_id)
        if user is None:
            user = await self.user_repo.get_by_email(session, norm_email)

        created = user is None
        if created:
            user = await self.user_repo.create(
                session,
                email=norm_email,
                google_id=google_id,
                name=name,
                image=image,
                phone=phone,
            )
            log.info("User provisioned user_id=%s email=%s", user.id, _mask_email(norm_email))
        else:
            # El perfil externo manda; solo se sobrescriben campos presentes
            if google_id and not user.google_id:
                user.google_id = google_id
            if name:
                user.name = name
            if image:
                user.image = image
            if phone:
                user.phone = phone
            await session.flush()
            log.debug("User profile refreshed user_id=%s", user.id)

        await self.ensure_user_wallet(session, user.id)
        return user, created

    async def ensure_user_wallet(self, session: AsyncSession, user_id: int) -> Wallet:
        return await self.wallet_service.ensure_wallet(session, user_id)


__all__ = ["UserService"]

# Fin del archivo app/modules/auth/services/user_service.py
