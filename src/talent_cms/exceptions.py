"""Domain level exceptions and helpers for repository layers."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from sqlalchemy import exc as sa_exc

__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "SlotNotFoundError",
    "NoFileProvidedError",
    "RejectedUploadError",
    "UnsupportedMediaError",
    "PayloadTooLargeError",
    "UploadReadError",
    "RepositoryError",
    "IntegrityConstraintViolation",
    "DatabaseOperationError",
    "PersistenceFailedError",
    "AuthenticationFailedError",
    "AccessDeniedError",
    "handle_sqlalchemy_errors",
]


class AppError(Exception):
    """Base class for application specific errors."""


class ValidationError(AppError):
    """Raised when a required request field is missing or malformed."""


class NotFoundError(AppError):
    """Raised when a record could not be located."""


class SlotNotFoundError(NotFoundError):
    """Raised when the parent row of a slot does not exist."""


class NoFileProvidedError(ValidationError):
    """Raised when a replacement is requested without an upload."""


class RejectedUploadError(AppError):
    """Raised by the upload receiver when a file is refused."""


class UnsupportedMediaError(RejectedUploadError):
    """Raised when the file extension is not on the allow-list."""


class PayloadTooLargeError(RejectedUploadError):
    """Raised when the uploaded file exceeds the configured limit."""


class UploadReadError(RejectedUploadError):
    """Raised when streaming the upload to disk fails."""


class AuthenticationFailedError(AppError):
    """Raised when account credentials do not match."""


class AccessDeniedError(AppError):
    """Raised when an authenticated account is not allowed to proceed."""


class RepositoryError(AppError):
    """Base class for persistence layer failures."""


class IntegrityConstraintViolation(RepositoryError):
    """Raised when a database constraint is violated."""


class DatabaseOperationError(RepositoryError):
    """Raised for unexpected database errors."""


class PersistenceFailedError(AppError):
    """Raised when a slot write fails after the upload was received."""


@dataclass(slots=True)
class _EntityContext:
    """Internal helper describing the entity for error messages."""

    entity: str | None = None

    def format(self, message: str) -> str:
        if self.entity:
            return f"{self.entity}: {message}"
        return message


def _translate_sqlalchemy_error(exc: Exception, *, context: _EntityContext) -> RepositoryError:
    if isinstance(exc, sa_exc.IntegrityError):
        return IntegrityConstraintViolation(context.format("integrity constraint violated"))
    if isinstance(exc, sa_exc.DBAPIError):
        return DatabaseOperationError(context.format("database operation failed"))
    return RepositoryError(context.format(str(exc)))


@contextmanager
def handle_sqlalchemy_errors(*, entity: str | None = None) -> Iterator[None]:
    """Translate SQLAlchemy errors into domain specific ones."""

    context = _EntityContext(entity)
    try:
        yield
    except sa_exc.SQLAlchemyError as exc:
        raise _translate_sqlalchemy_error(exc, context=context) from exc
