"""Swap the file held by a slot across the database and the filesystem.

The database and the upload directory share no transaction, so every swap
writes the new reference first and deletes the old file only after that write
committed. A crash or failure in between leaves the previous file on disk and
still referenced; the worst outcome is a stale file, never a reference to a
missing one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..exceptions import (
    NoFileProvidedError,
    PersistenceFailedError,
    RepositoryError,
    SlotNotFoundError,
)
from ..media.media_reconcile import reconcile
from ..media.media_storage import MediaStore
from .slot_kinds import SlotKind, get_kind
from .slots_models import ReplacementResult, SlotKey, Upload
from .slots_repository import SlotStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SlotReplacer:
    store: SlotStore
    media: MediaStore

    def replace(self, key: SlotKey, upload: Upload | None) -> ReplacementResult:
        if upload is None:
            raise NoFileProvidedError("No file uploaded")
        kind = get_kind(key.kind)

        try:
            slot = self.store.read(key)
        except SlotNotFoundError:
            self.media.discard(upload)
            raise
        except RepositoryError as exc:
            self.media.discard(upload)
            raise PersistenceFailedError(f"Failed to read slot '{key}'") from exc
        previous_file = slot.current_file

        try:
            self.store.write(key, upload.filename)
        except SlotNotFoundError:
            self.media.discard(upload)
            raise
        except RepositoryError as exc:
            self.media.discard(upload)
            logger.error(
                "slots.replace.write_failed",
                extra={"slot_key": str(key), "error": str(exc)},
            )
            raise PersistenceFailedError(f"Failed to update slot '{key}'") from exc

        logger.info(
            "slots.replace.committed",
            extra={
                "slot_key": str(key),
                "new_file": upload.filename,
                "previous_file": previous_file,
            },
        )
        if previous_file and self._is_distinct(kind, previous_file, upload):
            self.media.remove(kind, previous_file)
        return ReplacementResult(new_file=upload.filename, previous_file=previous_file)

    def clear(self, key: SlotKey) -> ReplacementResult:
        """Empty a slot, then delete the file it used to hold."""
        kind = get_kind(key.kind)
        try:
            slot = self.store.read(key)
            self.store.clear(key)
        except RepositoryError as exc:
            raise PersistenceFailedError(f"Failed to clear slot '{key}'") from exc
        previous_file = slot.current_file
        logger.info(
            "slots.clear.committed",
            extra={"slot_key": str(key), "previous_file": previous_file},
        )
        if previous_file:
            self.media.remove(kind, previous_file)
        return ReplacementResult(new_file=None, previous_file=previous_file)

    def release(self, kind: SlotKind, filenames: list[str]) -> list[str]:
        """Delete files of a removed row unless another live row still uses them."""
        live = self.store.live_references(kind)
        released: list[str] = []
        for filename in filenames:
            if not filename or filename in live or filename in released:
                continue
            self.media.remove(kind, filename)
            released.append(filename)
        return released

    def reconcile(self, kind: SlotKind) -> list[str]:
        """Remove files in the kind's directory that no live row references."""
        live = self.store.live_references(kind)
        removed = reconcile(self.media.directory(kind), live)
        if removed:
            logger.info(
                "slots.reconcile.done",
                extra={"kind": kind.name, "removed_count": len(removed)},
            )
        return removed

    def _is_distinct(self, kind: SlotKind, previous_file: str, upload: Upload) -> bool:
        if previous_file == upload.filename:
            return False
        previous_path = self.media.path_for(kind, previous_file)
        return previous_path.resolve() != upload.temp_path.resolve()


__all__ = ["SlotReplacer"]
