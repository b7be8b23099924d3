"""Slot domain dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class SlotKey:
    """Address of a single slot: ``kind:row_id`` or ``kind:row_id.field``."""

    kind: str
    row_id: int
    field: str | None = None

    @classmethod
    def parse(cls, raw: str) -> "SlotKey":
        kind, sep, rest = raw.partition(":")
        if not kind or not sep or not rest:
            raise ValueError(f"invalid slot key: {raw!r}")
        row_part, _, field = rest.partition(".")
        try:
            row_id = int(row_part)
        except ValueError as exc:
            raise ValueError(f"invalid slot key: {raw!r}") from exc
        return cls(kind=kind, row_id=row_id, field=field or None)

    def __str__(self) -> str:
        if self.field:
            return f"{self.kind}:{self.row_id}.{self.field}"
        return f"{self.kind}:{self.row_id}"


@dataclass(slots=True)
class Slot:
    key: SlotKey
    current_file: str | None = None
    updated_at: datetime | None = None


@dataclass(slots=True)
class Upload:
    """File accepted by the upload receiver, waiting to be adopted or discarded."""

    temp_path: Path
    filename: str
    size_bytes: int
    extension: str


@dataclass(slots=True)
class ReplacementResult:
    new_file: str | None
    previous_file: str | None

    def to_payload(self) -> dict[str, Any]:
        return {"newFile": self.new_file, "previousFile": self.previous_file}
