"""Admin dashboard actions over user accounts and tickets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

import structlog

from ..exceptions import NotFoundError, ValidationError
from ..users.users_models import Ticket, User
from ..users.users_repository import UsersRepository

logger = structlog.get_logger(__name__)


def _as_naive_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass(slots=True)
class DashboardService:
    repo: UsersRepository

    def tickets(self) -> list[Ticket]:
        return self.repo.list_tickets()

    def users(self) -> list[User]:
        return self.repo.list_users()

    def set_blocked(self, user_id: int, blocked: bool, actor: str | None = None) -> User:
        user = self._found(self.repo.set_blocked(user_id, blocked))
        logger.info("admin.user.blocked", user_id=user_id, blocked=blocked, actor=actor)
        return user

    def suspend(
        self,
        user_id: int,
        suspended_from: datetime,
        suspended_to: datetime,
        actor: str | None = None,
    ) -> User:
        start, end = _as_naive_utc(suspended_from), _as_naive_utc(suspended_to)
        if end <= start:
            raise ValidationError("Invalid input")
        user = self._found(self.repo.suspend(user_id, start, end))
        logger.info(
            "admin.user.suspended",
            user_id=user_id,
            suspended_from=start.isoformat(),
            suspended_to=end.isoformat(),
            actor=actor,
        )
        return user

    def unsuspend(self, user_id: int, actor: str | None = None) -> User:
        user = self._found(self.repo.unsuspend(user_id))
        logger.info("admin.user.unsuspended", user_id=user_id, actor=actor)
        return user

    def change_plan(self, user_id: int, plan: str, actor: str | None = None) -> User:
        plan = plan.strip()
        if not plan:
            raise ValidationError("Invalid input")
        user = self._found(self.repo.change_plan(user_id, plan))
        logger.info("admin.user.plan_changed", user_id=user_id, plan=plan, actor=actor)
        return user

    @staticmethod
    def _found(user: User | None) -> User:
        if user is None:
            raise NotFoundError("User not found")
        return user


__all__ = ["DashboardService"]
