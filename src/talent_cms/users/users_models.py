"""User account and support ticket dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(slots=True)
class User:
    id: int
    name: str
    email: str
    phone: str | None
    plan: str
    blocked: bool
    suspended: bool
    suspended_from: datetime | None
    suspended_to: datetime | None
    created_at: datetime | None
    password_hash: str | None = None

    def is_suspended_at(self, moment: datetime) -> bool:
        """True while ``moment`` falls inside the suspension window.

        A flagged account without a window is suspended until cleared.
        """
        if not self.suspended:
            return False
        if self.suspended_from and moment < self.suspended_from:
            return False
        if self.suspended_to and moment > self.suspended_to:
            return False
        return True

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "plan": self.plan,
            "blocked": self.blocked,
            "suspended": self.suspended,
            "suspendedFrom": self.suspended_from,
            "suspendedTo": self.suspended_to,
            "createdAt": self.created_at,
        }


@dataclass(slots=True)
class Ticket:
    id: int
    user_id: int | None
    name: str
    email: str
    subject: str
    message: str
    status: str
    created_at: datetime | None

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
            "status": self.status,
            "createdAt": self.created_at,
        }
