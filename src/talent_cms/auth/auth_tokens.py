"""JWT issuance and validation shared by admin and user sessions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from jwt import ExpiredSignatureError
from jwt import InvalidTokenError as PyJWTInvalidTokenError


def utcnow() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(tz=timezone.utc)


class AuthError(Exception):
    """Base class for auth failures."""


class InvalidTokenError(AuthError):
    """Raised when token cannot be decoded."""


class TokenExpiredError(AuthError):
    """Raised when token is expired."""


class InsufficientScopeError(AuthError):
    """Raised when token scope does not match requirement."""


@dataclass(slots=True)
class TokenCodec:
    signing_key: str
    token_ttl: timedelta
    algorithm: str = "HS256"

    def __post_init__(self) -> None:
        if not self.signing_key:
            raise RuntimeError("JWT_SIGNING_KEY is not configured")

    @property
    def expires_in(self) -> int:
        return int(self.token_ttl.total_seconds())

    def issue(self, subject: str, scope: str, issued_at: datetime | None = None) -> str:
        issued_at = issued_at or utcnow()
        payload: dict[str, Any] = {
            "sub": subject,
            "scope": scope,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.token_ttl).timestamp()),
        }
        return jwt.encode(payload, self.signing_key, algorithm=self.algorithm)

    def decode(self, token: str, required_scope: str | None = None) -> dict[str, Any]:
        """Decode JWT and ensure scope matches requirement."""
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self.signing_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "sub", "scope"]},
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token expired") from exc
        except PyJWTInvalidTokenError as exc:
            raise InvalidTokenError("Invalid token") from exc

        if required_scope and payload.get("scope") != required_scope:
            raise InsufficientScopeError("Insufficient scope")
        return payload


__all__ = [
    "AuthError",
    "InsufficientScopeError",
    "InvalidTokenError",
    "TokenCodec",
    "TokenExpiredError",
    "utcnow",
]
