from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from demo_reset.services.auth_service import (
    AdminTokenNotConfiguredError,
    AuthService,
    InvalidAdminTokenError,
)
from demo_reset.utils.config import get_settings


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


def _auth_service(admin_token: str | None, clock: FakeClock | None = None) -> AuthService:
    settings = replace(get_settings(), admin_token=admin_token, session_ttl_minutes=30)
    return AuthService(settings=settings, now_provider=clock)


def test_auth_disabled_accepts_any_bearer() -> None:
    service = _auth_service(None)

    assert service.auth_enabled is False
    service.validate_bearer_token("anything")


def test_login_without_configured_token_raises() -> None:
    with pytest.raises(AdminTokenNotConfiguredError):
        _auth_service(None).login("admin")


def test_login_with_wrong_token_raises() -> None:
    with pytest.raises(InvalidAdminTokenError):
        _auth_service("secret").login("guess")


def test_session_token_is_valid_until_it_expires() -> None:
    clock = FakeClock()
    service = _auth_service("secret", clock)
    bearer = service.login("secret")

    clock.now += timedelta(minutes=29)
    service.validate_bearer_token(bearer)

    clock.now += timedelta(minutes=1)
    with pytest.raises(InvalidAdminTokenError, match="expired"):
        service.validate_bearer_token(bearer)


def test_multiple_sessions_coexist_and_logout_revokes_one() -> None:
    service = _auth_service("secret", FakeClock())
    first = service.login("secret")
    second = service.login("secret")

    service.logout(first)

    with pytest.raises(InvalidAdminTokenError):
        service.validate_bearer_token(first)
    service.validate_bearer_token(second)
