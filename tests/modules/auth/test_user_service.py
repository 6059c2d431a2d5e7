# -*- coding: utf-8 -*-
"""
UserService: alta desde el proveedor de identidad y wallet inicial.
"""

import pytest

from app.shared.utils.http_exceptions import ValidationError
from app.modules.auth.repositories import UserRepository
from app.modules.auth.services.user_service import UserService, _mask_email


@pytest.fixture
def user_service(wallet_service):
    return UserService(UserRepository(), wallet_service)


async def test_provision_creates_user_with_wallet(session, user_service, wallet_service):
    user, created = await user_service.provision_from_identity(
        session, email="  Dana@Example.com ", google_id="g-123", name="Dana"
    )

    assert created is True
    assert user.email == "dana@example.com"
    assert user.google_id == "g-123"
    wallet = await wallet_service.get_wallet(session, user.id)
    assert wallet.current_balance == wallet_service.settings.initial_credits


async def test_provision_existing_user_updates_profile(session, user_service, wallet_service, user):
    await wallet_service.deduct(session, user.id, 40)

    again, created = await user_service.provision_from_identity(
        session, email="alice@example.com", google_id="g-alice", image="https://img.test/a.png"
    )

    assert created is False
    assert again.id == user.id
    assert again.google_id == "g-alice"
    assert again.image == "https://img.test/a.png"
    # La wallet existente no se reinicia
    assert await wallet_service.get_balance(session, user.id) == 60


async def test_provision_matches_by_google_id_first(session, user_service):
    first, _ = await user_service.provision_from_identity(session, email="eve@example.com", google_id="g-eve")
    second, created = await user_service.provision_from_identity(
        session, email="eve.new@example.com", google_id="g-eve", name="Eve"
    )
    assert created is False
    assert second.id == first.id
    assert second.name == "Eve"


@pytest.mark.parametrize("email", ["", "   ", "not-an-email", None])
async def test_provision_requires_email(session, user_service, email):
    with pytest.raises(ValidationError):
        await user_service.provision_from_identity(session, email=email)


async def test_get_by_id(session, user_service, user):
    assert (await user_service.get_by_id(session, user.id)).email == "alice@example.com"
    assert await user_service.get_by_id(session, "1") is None


@pytest.mark.parametrize(
    "email, masked",
    [("alice@example.com", "al***@exa***.com"), ("a@b", "***@b***"), ("", "***@***.***")],
)
def test_mask_email(email, masked):
    assert _mask_email(email) == masked
