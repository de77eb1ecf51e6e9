"""Admin token exchange for the reset endpoints."""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from demo_reset.utils.config import Settings, get_settings


class AuthenticationError(Exception):
    """Base authentication failure."""


class AdminTokenNotConfiguredError(AuthenticationError):
    """Raised when ADMIN_TOKEN is missing."""


class InvalidAdminTokenError(AuthenticationError):
    """Raised when a provided admin or session token is rejected."""


class AuthService:
    """Issues short-lived session bearers in exchange for ADMIN_TOKEN.

    When ADMIN_TOKEN is unset, authentication is disabled and every bearer
    is accepted.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        now_provider: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._now = now_provider or (lambda: datetime.now(timezone.utc))
        self._sessions: dict[str, datetime] = {}

    @property
    def auth_enabled(self) -> bool:
        return bool(self._settings.admin_token)

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(minutes=self._settings.session_ttl_minutes)

    def login(self, provided_admin_token: str) -> str:
        if not self._settings.admin_token:
            raise AdminTokenNotConfiguredError(
                "ADMIN_TOKEN is not configured. Set ADMIN_TOKEN in environment variables."
            )
        if not secrets.compare_digest(provided_admin_token, self._settings.admin_token):
            raise InvalidAdminTokenError("Invalid admin token")

        self._drop_expired_sessions()
        session_token = secrets.token_urlsafe(32)
        self._sessions[session_token] = self._now() + self.session_ttl
        return session_token

    def logout(self, session_token: str) -> None:
        self._sessions.pop(session_token, None)

    def validate_bearer_token(self, bearer_token: str) -> None:
        if not self.auth_enabled:
            return
        expires_at = self._sessions.get(bearer_token)
        if expires_at is None:
            raise InvalidAdminTokenError("Invalid bearer token. Login first.")
        if expires_at <= self._now():
            self._sessions.pop(bearer_token, None)
            raise InvalidAdminTokenError("Session expired. Login again.")

    def _drop_expired_sessions(self) -> None:
        now = self._now()
        for token in [token for token, expires_at in self._sessions.items() if expires_at <= now]:
            del self._sessions[token]
