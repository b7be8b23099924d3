"""Uploaded file storage on local disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..slots.slot_kinds import SlotKind
from ..slots.slots_models import Upload

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MediaStore:
    """Resolve, publish and remove files stored per slot kind."""

    root: Path

    def directory(self, kind: SlotKind) -> Path:
        return self.root / kind.directory

    def ensure_directory(self, kind: SlotKind) -> Path:
        directory = self.directory(kind)
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def path_for(self, kind: SlotKind, filename: str) -> Path:
        candidate = Path(filename)
        if candidate.is_absolute():
            return candidate
        return self.directory(kind) / candidate.name

    def public_url(self, base_url: str, kind: SlotKind, filename: str | None) -> str | None:
        if not filename:
            return None
        return f"{base_url.rstrip('/')}/uploads/{kind.directory}/{filename}"

    def remove(self, kind: SlotKind, filename: str) -> bool:
        """Delete a stored file; failures are logged and reported as ``False``."""
        path = self.path_for(kind, filename)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning(
                "media.remove.failed",
                extra={"kind": kind.name, "path": str(path), "error": str(exc)},
            )
            return False
        logger.info("media.remove.done", extra={"kind": kind.name, "path": str(path)})
        return True

    def discard(self, upload: Upload | None) -> None:
        """Drop an upload that was not adopted by any slot."""
        if upload is None:
            return
        try:
            upload.temp_path.unlink(missing_ok=True)
        except OSError as exc:
            logger.error(
                "media.discard.failed",
                extra={"path": str(upload.temp_path), "error": str(exc)},
            )
            return
        logger.info("media.discard.done", extra={"path": str(upload.temp_path)})

    def discard_all(self, uploads: dict[str, Upload]) -> None:
        for upload in uploads.values():
            self.discard(upload)


__all__ = ["MediaStore"]
