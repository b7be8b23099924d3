"""Create, update, list and delete promotional entities with their images."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import UploadFile

from ..exceptions import (
    NotFoundError,
    PersistenceFailedError,
    RepositoryError,
    ValidationError,
)
from ..media.media_storage import MediaStore
from ..media.upload_receiver import UploadReceiver
from ..slots.slot_replacement import SlotReplacer
from ..slots.slots_models import Upload
from .promo_models import PromoEntity
from .promo_repository import PromoRepository

logger = logging.getLogger(__name__)


def _has_file(upload: UploadFile | None) -> bool:
    return upload is not None and bool(upload.filename)


@dataclass(slots=True)
class PromoService:
    """Entity lifecycle around the slot replacement protocol.

    Create validates fields before any upload is stored and discards the
    uploads if the insert fails. Update rewrites text columns, then swaps each
    uploaded image through :class:`SlotReplacer`. Delete removes the row first
    and only then releases the files it referenced.
    """

    entity: PromoEntity
    repo: PromoRepository
    replacer: SlotReplacer
    receiver: UploadReceiver
    media: MediaStore

    def list_entities(self, base_url: str) -> list[dict[str, Any]]:
        rows = self.repo.list_rows(self.entity.kind)
        return [self.to_payload(row, base_url) for row in rows]

    async def create(
        self, values: dict[str, Any], files: dict[str, UploadFile | None]
    ) -> dict[str, Any]:
        kind = self.entity.kind
        fields = self._clean(values, partial=False)
        missing = [name for name in self.entity.required_fields if fields.get(name) is None]
        missing += [name for name in self.entity.required_files if not _has_file(files.get(name))]
        if missing:
            raise ValidationError("Required fields missing")
        for name, default in self.entity.defaults.items():
            if fields.get(name) is None:
                fields[name] = default

        uploads = await self.receiver.receive_many(kind, self._slot_files(files))
        try:
            row = self.repo.create(
                kind, {**fields, **{name: upload.filename for name, upload in uploads.items()}}
            )
        except RepositoryError as exc:
            self.media.discard_all(uploads)
            logger.error(
                "promo.create.failed",
                extra={"kind": kind.name, "error": str(exc)},
            )
            raise PersistenceFailedError(f"Failed to save {self.entity.label.lower()}") from exc

        logger.info("promo.create.done", extra={"kind": kind.name, "row_id": row["id"]})
        if self.entity.log_activity:
            self._record_activity(f"Added featured talent: {row.get('name')}")
        return row

    async def update(
        self, row_id: int, values: dict[str, Any], files: dict[str, UploadFile | None]
    ) -> dict[str, Any]:
        kind = self.entity.kind
        if self.repo.get(kind, row_id) is None:
            raise NotFoundError(f"{self.entity.label} not found")
        fields = self._clean(values, partial=True)

        uploads = await self.receiver.receive_many(kind, self._slot_files(files))
        if fields:
            try:
                updated = self.repo.update(kind, row_id, fields)
            except RepositoryError as exc:
                self.media.discard_all(uploads)
                raise PersistenceFailedError(
                    f"Failed to update {self.entity.label.lower()}"
                ) from exc
            if updated is None:
                self.media.discard_all(uploads)
                raise NotFoundError(f"{self.entity.label} not found")

        self._replace_slots(row_id, uploads)
        if kind.reconcile and uploads:
            self.replacer.reconcile(kind)

        row = self.repo.get(kind, row_id)
        if row is None:
            raise NotFoundError(f"{self.entity.label} not found")
        logger.info(
            "promo.update.done",
            extra={"kind": kind.name, "row_id": row_id, "replaced": sorted(uploads)},
        )
        return row

    def delete(self, row_id: int) -> list[str]:
        """Delete the row, then its files; returns the filenames removed."""
        kind = self.entity.kind
        snapshot = self.repo.delete(kind, row_id)
        if snapshot is None:
            raise NotFoundError(f"{self.entity.label} not found")

        released = self.replacer.release(kind, [snapshot.get(name) for name in kind.fields])
        if kind.reconcile:
            released += self.replacer.reconcile(kind)
        logger.info(
            "promo.delete.done",
            extra={"kind": kind.name, "row_id": row_id, "released": released},
        )
        if self.entity.log_activity:
            self._record_activity(f"Deleted featured talent ID: {row_id}")
        return released

    def to_payload(self, row: dict[str, Any], base_url: str) -> dict[str, Any]:
        payload = dict(row)
        for column, url_key in self.entity.url_fields.items():
            payload[url_key] = self.media.public_url(base_url, self.entity.kind, row.get(column))
        return payload

    def _replace_slots(self, row_id: int, uploads: dict[str, Upload]) -> None:
        pending = dict(uploads)
        try:
            for name, upload in uploads.items():
                pending.pop(name)
                self.replacer.replace(self.entity.kind.key(row_id, name), upload)
        except Exception:
            self.media.discard_all(pending)
            raise

    def _slot_files(self, files: dict[str, UploadFile | None]) -> dict[str, UploadFile | None]:
        return {name: files.get(name) for name in self.entity.kind.fields if _has_file(files.get(name))}

    def _clean(self, values: dict[str, Any], *, partial: bool) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for name in self.entity.text_fields:
            value = values.get(name)
            if isinstance(value, str):
                value = value.strip()
            if value is None or value == "":
                if not partial:
                    cleaned[name] = None
                continue
            if name in self.entity.integer_fields:
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    raise ValidationError(f"{name} must be an integer") from None
            allowed = self.entity.choices.get(name)
            if allowed is not None and value not in allowed:
                raise ValidationError(f"{name} must be one of: {', '.join(allowed)}")
            cleaned[name] = value
        return cleaned

    def _record_activity(self, info: str) -> None:
        try:
            self.repo.record_activity(info)
        except RepositoryError as exc:
            logger.warning("promo.activity.failed", extra={"info": info, "error": str(exc)})


__all__ = ["PromoService"]
