"""Registration, login, profile and support tickets for site users."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from ..auth.auth_tokens import TokenCodec, utcnow
from ..exceptions import (
    AccessDeniedError,
    AuthenticationFailedError,
    IntegrityConstraintViolation,
    NotFoundError,
    ValidationError,
)
from ..security.passwords import DEFAULT_ITERATIONS, hash_password, verify_password
from .users_models import Ticket, User
from .users_repository import PROFILE_FIELDS, UsersRepository

logger = structlog.get_logger(__name__)

USER_SCOPE = "user"


@dataclass(slots=True)
class UserService:
    repo: UsersRepository
    tokens: TokenCodec
    password_iterations: int = DEFAULT_ITERATIONS

    def register(self, *, name: str, email: str, password: str, phone: str | None = None) -> User:
        name, email = name.strip(), email.strip().lower()
        if not name or not email or not password:
            raise ValidationError("Name, email and password are required")
        if self.repo.get_by_email(email) is not None:
            raise ValidationError("Email already registered")
        try:
            user = self.repo.create_user(
                name=name,
                email=email,
                phone=phone,
                password_hash=hash_password(password, iterations=self.password_iterations),
            )
        except IntegrityConstraintViolation as exc:
            raise ValidationError("Email already registered") from exc
        logger.info("users.register.success", user_id=user.id)
        return user

    def login(self, email: str, password: str) -> tuple[str, int, User]:
        """Return a user token, its ttl in seconds and the account."""
        user = self.repo.get_by_email(email.strip().lower())
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("users.login.failure", reason="invalid_credentials")
            raise AuthenticationFailedError("Invalid email or password")
        if user.blocked:
            logger.warning("users.login.failure", user_id=user.id, reason="blocked")
            raise AccessDeniedError("Your account has been blocked")
        if user.is_suspended_at(utcnow().replace(tzinfo=None)):
            logger.warning("users.login.failure", user_id=user.id, reason="suspended")
            until = user.suspended_to.isoformat() if user.suspended_to else "further notice"
            raise AccessDeniedError(f"Your account is suspended until {until}")

        token = self.tokens.issue(str(user.id), USER_SCOPE)
        logger.info("users.login.success", user_id=user.id)
        user.password_hash = None
        return token, self.tokens.expires_in, user

    def profile(self, user_id: int) -> User:
        user = self.repo.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: int, values: dict[str, Any]) -> User:
        changes = {
            key: value.strip() if isinstance(value, str) else value
            for key, value in values.items()
            if key in PROFILE_FIELDS and value is not None
        }
        if "name" in changes and not changes["name"]:
            raise ValidationError("Name must not be empty")
        if not changes:
            return self.profile(user_id)
        user = self.repo.update(user_id, changes)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def create_ticket(self, *, name: str, email: str, subject: str, message: str) -> Ticket:
        fields = {
            "name": name.strip(),
            "email": email.strip().lower(),
            "subject": subject.strip(),
            "message": message.strip(),
        }
        if not all(fields.values()):
            raise ValidationError("All fields are required")
        owner = self.repo.get_by_email(fields["email"])
        ticket = self.repo.create_ticket(user_id=owner.id if owner else None, **fields)
        logger.info("users.ticket.created", ticket_id=ticket.id, user_id=ticket.user_id)
        return ticket


__all__ = ["USER_SCOPE", "UserService"]
