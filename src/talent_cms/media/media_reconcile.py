"""Orphan sweep for shared upload directories."""

from __future__ import annotations

import logging
from collections.abc import Collection
from pathlib import Path

logger = logging.getLogger(__name__)


def find_orphans(directory: Path, live_references: Collection[str]) -> list[str]:
    """Return names of regular files in ``directory`` that nothing references."""
    if not directory.is_dir():
        return []
    return sorted(
        entry.name
        for entry in directory.iterdir()
        if entry.is_file() and entry.name not in live_references
    )


def reconcile(directory: Path, live_references: Collection[str]) -> list[str]:
    """Delete every file in ``directory`` not named in ``live_references``.

    The directory is listed once. A file written by a concurrent request whose
    row is not committed yet is indistinguishable from an orphan, so callers
    run this only after their own write is durable and accept that race.
    """
    removed: list[str] = []
    for name in find_orphans(directory, live_references):
        path = directory / name
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning(
                "media.reconcile.remove_failed",
                extra={"path": str(path), "error": str(exc)},
            )
            continue
        removed.append(name)
        logger.info("media.reconcile.removed", extra={"path": str(path)})
    return removed


__all__ = ["find_orphans", "reconcile"]
