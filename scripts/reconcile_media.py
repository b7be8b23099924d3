"""Cron entry point for sweeping orphaned uploads across every slot kind."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field

from src.talent_cms.config import load_config
from src.talent_cms.media.media_reconcile import find_orphans
from src.talent_cms.media.media_storage import MediaStore
from src.talent_cms.slots.slot_kinds import SLOT_KINDS
from src.talent_cms.slots.slot_replacement import SlotReplacer
from src.talent_cms.slots.slots_repository import SlotStore


@dataclass(slots=True)
class ReconcileSummary:
    orphans: dict[str, int] = field(default_factory=dict)
    dry_run: bool = False

    @property
    def total(self) -> int:
        return sum(self.orphans.values())


def perform_reconcile(*, dry_run: bool) -> ReconcileSummary:
    """Remove (or only count) files that no row of their kind references."""
    config = load_config()
    store = SlotStore(config.session_factory)
    media = MediaStore(config.media_root)
    replacer = SlotReplacer(store=store, media=media)

    summary = ReconcileSummary(dry_run=dry_run)
    for name, kind in SLOT_KINDS.items():
        if dry_run:
            orphans = find_orphans(media.directory(kind), store.live_references(kind))
        else:
            orphans = replacer.reconcile(kind)
        summary.orphans[name] = len(orphans)
    return summary


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete uploads no database row references.")
    parser.add_argument("--dry-run", action="store_true", help="Only report counts without deleting files.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or [])
    try:
        summary = perform_reconcile(dry_run=args.dry_run)
    except Exception as exc:
        print(f"reconcile failed: {exc}", file=sys.stderr)
        return 2

    counts = ", ".join(f"{name}={count}" for name, count in summary.orphans.items())
    label = "reconcile dry-run, orphans" if summary.dry_run else "reconcile done, removed"
    print(f"{label}: {counts} (total={summary.total})", file=sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
