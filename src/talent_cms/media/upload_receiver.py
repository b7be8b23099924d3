"""Receive multipart uploads into per-kind directories."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

from ..config import UploadLimits
from ..exceptions import PayloadTooLargeError, UnsupportedMediaError, UploadReadError
from ..slots.slot_kinds import SlotKind
from ..slots.slots_models import Upload
from .media_storage import MediaStore

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(slots=True)
class UploadReceiver:
    """Validate extension and size, then write the file under a unique name.

    A rejected upload never leaves a partial file behind.
    """

    limits: UploadLimits
    media: MediaStore

    async def receive(self, kind: SlotKind, upload: UploadFile | None) -> Upload | None:
        if upload is None or not upload.filename:
            return None

        extension = Path(upload.filename).suffix.lower()
        if extension not in self.limits.extensions_for(kind.media):
            logger.warning(
                "media.upload.unsupported_media",
                extra={"kind": kind.name, "upload_name": upload.filename},
            )
            raise UnsupportedMediaError(
                f"Only {', '.join(self.limits.extensions_for(kind.media))} files are allowed"
            )

        cap = self.limits.limit_bytes(kind.limit)
        directory = self.media.ensure_directory(kind)
        target = self._reserve_target(directory, upload.filename)
        size = 0
        try:
            with target.open("wb") as sink:
                while True:
                    chunk = await upload.read(self.limits.chunk_size_bytes)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > cap:
                        logger.warning(
                            "media.upload.payload_too_large",
                            extra={"kind": kind.name, "size_bytes": size, "limit_bytes": cap},
                        )
                        raise PayloadTooLargeError(
                            f"File exceeds the {cap // (1024 * 1024)} MB limit"
                        )
                    sink.write(chunk)
        except PayloadTooLargeError:
            target.unlink(missing_ok=True)
            raise
        except OSError as exc:
            target.unlink(missing_ok=True)
            logger.error("media.upload.write_failed", exc_info=exc)
            raise UploadReadError("Failed to store uploaded file") from exc

        logger.info(
            "media.upload.stored",
            extra={"kind": kind.name, "path": str(target), "size_bytes": size},
        )
        return Upload(
            temp_path=target,
            filename=target.name,
            size_bytes=size,
            extension=extension,
        )

    async def receive_many(
        self, kind: SlotKind, uploads: dict[str, UploadFile | None]
    ) -> dict[str, Upload]:
        """Receive several fields; on any rejection discard the ones already stored."""
        received: dict[str, Upload] = {}
        try:
            for field, upload in uploads.items():
                stored = await self.receive(kind, upload)
                if stored is not None:
                    received[field] = stored
        except Exception:
            self.media.discard_all(received)
            raise
        return received

    @staticmethod
    def _reserve_target(directory: Path, original_name: str) -> Path:
        """Atomically create an empty file under a fresh name and return its path."""
        name = _UNSAFE_CHARS.sub("_", Path(original_name).name).strip("._") or "upload"
        stamp = int(time.time() * 1000)
        while True:
            target = directory / f"{stamp}-{name}"
            try:
                with target.open("xb"):
                    return target
            except FileExistsError:
                stamp += 1


__all__ = ["UploadReceiver"]
