"""SQLAlchemy persistence for user accounts and support tickets."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.db_models import TicketModel, UserModel
from ..exceptions import handle_sqlalchemy_errors
from .users_models import Ticket, User

PROFILE_FIELDS = ("name", "phone")


class UsersRepository:
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def create_user(
        self, *, name: str, email: str, phone: str | None, password_hash: str
    ) -> User:
        with handle_sqlalchemy_errors(entity="user"):
            with self._session_factory() as session:
                row = UserModel(name=name, email=email, phone=phone, password_hash=password_hash)
                session.add(row)
                session.commit()
                return self._to_user(row)

    def get(self, user_id: int) -> User | None:
        with handle_sqlalchemy_errors(entity="user"):
            with self._session_factory() as session:
                row = session.get(UserModel, user_id)
                return self._to_user(row) if row is not None else None

    def get_by_email(self, email: str) -> User | None:
        with handle_sqlalchemy_errors(entity="user"):
            with self._session_factory() as session:
                row = session.scalars(select(UserModel).where(UserModel.email == email)).first()
                return self._to_user(row, with_hash=True) if row is not None else None

    def list_users(self) -> list[User]:
        with handle_sqlalchemy_errors(entity="user"):
            with self._session_factory() as session:
                rows = session.scalars(select(UserModel).order_by(UserModel.id.desc())).all()
                return [self._to_user(row) for row in rows]

    def update(self, user_id: int, values: dict[str, Any]) -> User | None:
        """Apply column changes; returns ``None`` when the user does not exist."""
        with handle_sqlalchemy_errors(entity="user"):
            with self._session_factory() as session:
                row = session.get(UserModel, user_id)
                if row is None:
                    return None
                for key, value in values.items():
                    setattr(row, key, value)
                session.commit()
                return self._to_user(row)

    def set_blocked(self, user_id: int, blocked: bool) -> User | None:
        return self.update(user_id, {"blocked": blocked})

    def suspend(self, user_id: int, suspended_from: datetime, suspended_to: datetime) -> User | None:
        return self.update(
            user_id,
            {"suspended": True, "suspended_from": suspended_from, "suspended_to": suspended_to},
        )

    def unsuspend(self, user_id: int) -> User | None:
        return self.update(
            user_id, {"suspended": False, "suspended_from": None, "suspended_to": None}
        )

    def change_plan(self, user_id: int, plan: str) -> User | None:
        return self.update(user_id, {"plan": plan})

    def create_ticket(
        self,
        *,
        user_id: int | None,
        name: str,
        email: str,
        subject: str,
        message: str,
    ) -> Ticket:
        with handle_sqlalchemy_errors(entity="ticket"):
            with self._session_factory() as session:
                row = TicketModel(
                    user_id=user_id, name=name, email=email, subject=subject, message=message
                )
                session.add(row)
                session.commit()
                return self._to_ticket(row)

    def list_tickets(self) -> list[Ticket]:
        with handle_sqlalchemy_errors(entity="ticket"):
            with self._session_factory() as session:
                rows = session.scalars(select(TicketModel).order_by(TicketModel.id.desc())).all()
                return [self._to_ticket(row) for row in rows]

    @staticmethod
    def _to_user(row: UserModel, *, with_hash: bool = False) -> User:
        return User(
            id=row.id,
            name=row.name,
            email=row.email,
            phone=row.phone,
            plan=row.plan,
            blocked=row.blocked,
            suspended=row.suspended,
            suspended_from=row.suspended_from,
            suspended_to=row.suspended_to,
            created_at=row.created_at,
            password_hash=row.password_hash if with_hash else None,
        )

    @staticmethod
    def _to_ticket(row: TicketModel) -> Ticket:
        return Ticket(
            id=row.id,
            user_id=row.user_id,
            name=row.name,
            email=row.email,
            subject=row.subject,
            message=row.message,
            status=row.status,
            created_at=row.created_at,
        )


__all__ = ["PROFILE_FIELDS", "UsersRepository"]
