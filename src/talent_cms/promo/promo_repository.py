"""SQLAlchemy persistence for promotional entities."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqlalchemy.orm import Session

from ..db.db_models import ActivityLogModel, Base
from ..exceptions import handle_sqlalchemy_errors
from ..slots.slot_kinds import SlotKind


def _row_to_dict(row: Base) -> dict[str, Any]:
    return {column.key: getattr(row, column.key) for column in row.__table__.columns}


class PromoRepository:
    """Plain CRUD over the table backing a slot kind; rows come back as dicts."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def create(self, kind: SlotKind, values: dict[str, Any]) -> dict[str, Any]:
        with handle_sqlalchemy_errors(entity=kind.name):
            with self._session_factory() as session:
                row = kind.model(**values)
                session.add(row)
                session.commit()
                return _row_to_dict(row)

    def get(self, kind: SlotKind, row_id: int) -> dict[str, Any] | None:
        with handle_sqlalchemy_errors(entity=kind.name):
            with self._session_factory() as session:
                row = session.get(kind.model, row_id)
                return _row_to_dict(row) if row is not None else None

    def list_rows(self, kind: SlotKind) -> list[dict[str, Any]]:
        """Newest first."""
        with handle_sqlalchemy_errors(entity=kind.name):
            with self._session_factory() as session:
                rows = session.query(kind.model).order_by(kind.model.id.desc()).all()
                return [_row_to_dict(row) for row in rows]

    def update(self, kind: SlotKind, row_id: int, values: dict[str, Any]) -> dict[str, Any] | None:
        with handle_sqlalchemy_errors(entity=kind.name):
            with self._session_factory() as session:
                row = session.get(kind.model, row_id)
                if row is None:
                    return None
                for key, value in values.items():
                    setattr(row, key, value)
                session.commit()
                return _row_to_dict(row)

    def delete(self, kind: SlotKind, row_id: int) -> dict[str, Any] | None:
        """Delete a row and return its last state, or ``None`` if it was missing."""
        with handle_sqlalchemy_errors(entity=kind.name):
            with self._session_factory() as session:
                row = session.get(kind.model, row_id)
                if row is None:
                    return None
                snapshot = _row_to_dict(row)
                session.delete(row)
                session.commit()
                return snapshot

    def record_activity(self, info: str) -> None:
        with handle_sqlalchemy_errors(entity="activity_log"):
            with self._session_factory() as session:
                session.add(ActivityLogModel(info=info))
                session.commit()

    def activity(self, limit: int = 50) -> list[dict[str, Any]]:
        with handle_sqlalchemy_errors(entity="activity_log"):
            with self._session_factory() as session:
                rows = (
                    session.query(ActivityLogModel)
                    .order_by(ActivityLogModel.id.desc())
                    .limit(limit)
                    .all()
                )
                return [_row_to_dict(row) for row in rows]


__all__ = ["PromoRepository"]
