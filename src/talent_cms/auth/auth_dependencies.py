"""Common authentication dependencies for FastAPI routers."""

from __future__ import annotations

from typing import Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .auth_service import AuthService
from .auth_tokens import (
    InsufficientScopeError,
    InvalidTokenError,
    TokenCodec,
    TokenExpiredError,
)

security = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    try:
        return request.app.state.auth_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("AuthService is not configured") from exc


def get_token_codec(request: Request) -> TokenCodec:
    try:
        return request.app.state.token_codec  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("TokenCodec is not configured") from exc


def _decode_bearer(
    credentials: HTTPAuthorizationCredentials | None,
    codec: TokenCodec,
    scope: str,
) -> dict[str, Any]:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token"
        )
    try:
        return codec.decode(credentials.credentials, required_scope=scope)
    except TokenExpiredError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired"
        ) from exc
    except InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        ) from exc
    except InsufficientScopeError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient scope"
        ) from exc


def require_admin_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    codec: TokenCodec = Depends(get_token_codec),
) -> dict[str, Any]:
    return _decode_bearer(credentials, codec, "admin")


def require_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    codec: TokenCodec = Depends(get_token_codec),
) -> dict[str, Any]:
    return _decode_bearer(credentials, codec, "user")


__all__ = ["get_auth_service", "get_token_codec", "require_admin_user", "require_user"]
