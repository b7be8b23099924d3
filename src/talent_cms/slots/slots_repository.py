"""Slot store backed by SQLAlchemy."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy import exc as sa_exc
from sqlalchemy import inspect
from sqlalchemy.orm import Session

from ..db.db_models import utcnow_naive
from ..exceptions import SlotNotFoundError, handle_sqlalchemy_errors
from .slot_kinds import SlotKind, get_kind
from .slots_models import Slot, SlotKey

logger = logging.getLogger(__name__)


class SlotStore:
    """Map slot keys to the file reference stored in their parent row."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def ensure_schema(self, kind: SlotKind) -> None:
        """Create the kind's table and default rows if they are missing.

        Safe to call repeatedly and from concurrent processes: a table or seed
        row created by another caller in the meantime is not an error.
        """
        table = kind.model.__table__
        with handle_sqlalchemy_errors(entity=kind.name):
            with self._session_factory() as session:
                connection = session.connection()
                try:
                    table.create(connection, checkfirst=True)
                except sa_exc.DBAPIError:
                    session.rollback()
                    if not inspect(session.connection()).has_table(table.name):
                        raise
                    logger.info("slots.schema.created_concurrently", extra={"kind": kind.name})
                session.commit()

            for row_id in kind.default_ids:
                with self._session_factory() as session:
                    if session.get(kind.model, row_id) is not None:
                        continue
                    session.add(kind.model(id=row_id))
                    try:
                        session.commit()
                    except sa_exc.IntegrityError:
                        session.rollback()
                        logger.info(
                            "slots.schema.seed_exists",
                            extra={"kind": kind.name, "row_id": row_id},
                        )

    def read(self, key: SlotKey) -> Slot:
        kind = get_kind(key.kind)
        column = kind.column(key.field)
        with handle_sqlalchemy_errors(entity=kind.name):
            with self._session_factory() as session:
                row = session.get(kind.model, key.row_id)
                if row is None:
                    raise SlotNotFoundError(f"Slot '{key}' not found")
                return self._to_domain(key, row, column)

    def write(self, key: SlotKey, filename: str | None) -> Slot:
        """Point the slot at ``filename`` and stamp ``updated_at``."""
        kind = get_kind(key.kind)
        column = kind.column(key.field)
        with handle_sqlalchemy_errors(entity=kind.name):
            with self._session_factory() as session:
                row = session.get(kind.model, key.row_id)
                if row is None:
                    raise SlotNotFoundError(f"Slot '{key}' not found")
                setattr(row, column, filename)
                if hasattr(row, "updated_at"):
                    row.updated_at = utcnow_naive()
                session.commit()
                return self._to_domain(key, row, column)

    def clear(self, key: SlotKey) -> Slot:
        return self.write(key, None)

    def list_slots(self, kind: SlotKind) -> list[Slot]:
        """Return every slot of a single-field kind ordered by row id."""
        column = kind.column(None)
        with handle_sqlalchemy_errors(entity=kind.name):
            with self._session_factory() as session:
                rows = session.query(kind.model).order_by(kind.model.id).all()
                return [self._to_domain(kind.key(row.id), row, column) for row in rows]

    def live_references(self, kind: SlotKind) -> set[str]:
        """Every filename currently referenced by any row of ``kind``."""
        columns = [getattr(kind.model, field) for field in kind.fields]
        with handle_sqlalchemy_errors(entity=kind.name):
            with self._session_factory() as session:
                rows = session.query(*columns).all()
        return {value for row in rows for value in row if value}

    @staticmethod
    def _to_domain(key: SlotKey, row: object, column: str) -> Slot:
        return Slot(
            key=key,
            current_file=getattr(row, column),
            updated_at=getattr(row, "updated_at", None),
        )


__all__ = ["SlotStore"]
