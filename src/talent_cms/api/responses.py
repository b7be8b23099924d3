"""JSON envelope shared by every endpoint.

Shape: ``{"success": bool, "message": str, "data"?: any, "error"?: str}``.
"""

from __future__ import annotations

from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

_MISSING = object()


def envelope(
    message: str,
    data: Any = _MISSING,
    *,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Return a successful envelope; ``data`` is omitted unless given."""

    content: dict[str, Any] = {"success": True, "message": message}
    if data is not _MISSING:
        content["data"] = jsonable_encoder(data)
    return JSONResponse(status_code=status_code, content=content)


def created(message: str, data: Any = _MISSING) -> JSONResponse:
    return envelope(message, data, status_code=status.HTTP_201_CREATED)


def error_envelope(
    message: str,
    *,
    status_code: int,
    error: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content, headers=headers)


__all__ = ["created", "envelope", "error_envelope"]
