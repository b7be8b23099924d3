"""Translate application exceptions into the JSON envelope."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..exceptions import (
    AccessDeniedError,
    AppError,
    AuthenticationFailedError,
    NotFoundError,
    PersistenceFailedError,
    RejectedUploadError,
    RepositoryError,
    ValidationError,
)
from .responses import error_envelope

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[AppError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (RejectedUploadError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationFailedError, status.HTTP_401_UNAUTHORIZED),
    (AccessDeniedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PersistenceFailedError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (RepositoryError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: AppError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(
            "api.request.failed",
            extra={"path": request.url.path, "error": str(exc)},
            exc_info=exc,
        )
        message = "Failed to save changes" if isinstance(exc, PersistenceFailedError) else "Server error"
        return error_envelope(message, status_code=status_code, error=str(exc))
    return error_envelope(str(exc), status_code=status_code)


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_envelope(
        message, status_code=exc.status_code, headers=getattr(exc, "headers", None)
    )


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    return error_envelope(
        "Invalid input", status_code=status.HTTP_400_BAD_REQUEST, error=details
    )


async def catch_unhandled_errors(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    try:
        return await call_next(request)
    except Exception:
        logger.exception("api.request.unhandled", extra={"path": request.url.path})
        return error_envelope(
            "Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.middleware("http")(catch_unhandled_errors)


__all__ = ["register_exception_handlers", "status_for"]
