"""Session log records (opaque identifiers).

Session ids are generated unique strings. They identify an entry but say
nothing about its position: comparing two ids with ``<`` is meaningless, so a
boundary search over them is wrong even though pages still arrive newest first.
Every position is found by scanning for an exact id match.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import ClassVar

from rclogfetch.core.models import LogKind, SessionLogEntry
from rclogfetch.records.base import RecordStore, fold_page, trim_page


def index_of(entries: Sequence[SessionLogEntry], entry_id: str) -> int | None:
    """Index of the first entry whose id equals `entry_id`, or None."""
    for i, entry in enumerate(entries):
        if entry.id == entry_id:
            return i
    return None


def filter_page(page: Sequence[SessionLogEntry], checkpoint: str) -> tuple[list[SessionLogEntry], bool]:
    """Keep the entries before the one with id `checkpoint`; report whether it was in `page`."""
    return trim_page(page, index_of(page, checkpoint))


def _overlap_start(existing: Sequence[SessionLogEntry], head_id: str) -> int:
    n = index_of(existing, head_id)
    return len(existing) if n is None else n


def merge_pages(existing: Sequence[SessionLogEntry], page: Sequence[SessionLogEntry]) -> list[SessionLogEntry]:
    """Append `page`, cutting `existing` at the entry that `page` starts with (if present)."""
    return fold_page(existing, page, _overlap_start)


class SessionLogStore(RecordStore[SessionLogEntry, str]):
    """Accumulator for the session log."""

    kind: ClassVar[LogKind] = "session"
    entry_model = SessionLogEntry
    zero_checkpoint = ""

    filter_page = staticmethod(filter_page)
    merge_pages = staticmethod(merge_pages)

    @staticmethod
    def sort_key(entry: SessionLogEntry) -> datetime:
        return entry.timestamp

    @classmethod
    def coerce_checkpoint(cls, raw: object) -> str:
        if not isinstance(raw, str):
            raise ValueError(f"session checkpoint must be a string, got {type(raw).__name__}")
        return raw
