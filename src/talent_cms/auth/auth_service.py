"""Admin authentication and JWT issuance."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Iterable

import structlog

from ..security.passwords import verify_password
from .auth_tokens import AuthError, TokenCodec, utcnow

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class AdminCredential:
    """Single admin record loaded from the credentials file."""

    username: str
    password_hash: str
    scope: str = "admin"
    disabled: bool = False

    def verify(self, password: str) -> bool:
        return not self.disabled and verify_password(password, self.password_hash)


@dataclass(slots=True)
class FailedLoginState:
    """Tracks consecutive failures and throttle window per username."""

    failures: int = 0
    blocked_until: datetime | None = None


class InvalidCredentialsError(AuthError):
    """Raised when username/password mismatch."""


class LoginThrottledError(AuthError):
    """Raised when user hit throttle limit."""


@dataclass(slots=True)
class AuthService:
    """Authenticate static admins and issue JWT tokens."""

    credentials: dict[str, AdminCredential]
    tokens: TokenCodec
    scope: str = "admin"
    max_failures: int = 10
    block_duration: timedelta = timedelta(minutes=15)
    _failed_logins: dict[str, FailedLoginState] = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: Path, tokens: TokenCodec) -> "AuthService":
        return cls(credentials=cls._load_credentials(path), tokens=tokens)

    @staticmethod
    def _load_credentials(path: Path) -> dict[str, AdminCredential]:
        if not path.exists():
            raise FileNotFoundError(f"Admin credentials file not found: {path}")
        raw = json.loads(path.read_text(encoding="utf-8"))
        admins = raw.get("admins", [])
        if not isinstance(admins, Iterable):
            raise ValueError(
                "Invalid admin credentials structure: 'admins' must be an array"
            )
        records: dict[str, AdminCredential] = {}
        for entry in admins:
            username = entry.get("username")
            password_hash = entry.get("password_hash")
            if not username or not password_hash:
                raise ValueError(
                    "Each admin entry must contain username and password_hash"
                )
            records[username] = AdminCredential(
                username=username,
                password_hash=password_hash,
                scope=entry.get("scope", "admin"),
                disabled=entry.get("disabled", False),
            )
        if not records:
            raise ValueError("No admin credentials configured")
        return records

    def authenticate(
        self, username: str, password: str, client_ip: str | None = None
    ) -> tuple[str, int]:
        """Validate credentials and return JWT token + ttl seconds."""
        now = utcnow()
        state = self._failed_logins.get(username)
        if state and state.blocked_until and now < state.blocked_until:
            logger.warning(
                "auth.admin_login.failure",
                username=username,
                reason="throttled",
                blocked_until=state.blocked_until.isoformat(),
                client_ip=client_ip,
            )
            raise LoginThrottledError("Too many attempts, try later")

        credential = self.credentials.get(username)
        if not credential or not credential.verify(password):
            self._register_failure(username, now)
            logger.warning(
                "auth.admin_login.failure",
                username=username,
                reason="invalid_credentials",
                client_ip=client_ip,
            )
            raise InvalidCredentialsError("Invalid username or password")

        self._failed_logins.pop(username, None)
        token = self.tokens.issue(username, credential.scope, issued_at=now)
        logger.info(
            "auth.admin_login.success",
            username=username,
            client_ip=client_ip,
            expires_in=self.tokens.expires_in,
        )
        return token, self.tokens.expires_in

    def _register_failure(self, username: str, now: datetime) -> None:
        state = self._failed_logins.setdefault(username, FailedLoginState())
        state.failures += 1
        if state.failures >= self.max_failures:
            state.failures = 0
            state.blocked_until = now + self.block_duration
        else:
            state.blocked_until = None

    def validate_token(
        self, token: str, required_scope: str | None = None
    ) -> dict[str, Any]:
        return self.tokens.decode(token, required_scope=required_scope)

    def profile(self, username: str) -> dict[str, Any]:
        credential = self.credentials.get(username)
        if credential is None:
            raise InvalidCredentialsError("Unknown admin")
        return {"username": credential.username, "scope": credential.scope}


__all__ = [
    "AdminCredential",
    "AuthService",
    "InvalidCredentialsError",
    "LoginThrottledError",
]
