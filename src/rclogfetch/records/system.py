"""System log records (numeric identifiers).

System log ids grow with insertion order and pages arrive sorted by id,
descending. Positions are therefore found with a boundary search: the first
index whose id is at or below a marker.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence
from typing import ClassVar

from rclogfetch.core.models import LogKind, SystemLogEntry
from rclogfetch.records.base import RecordStore, fold_page, trim_page

UINT32_MAX = 2**32 - 1


def first_at_or_below(entries: Sequence[SystemLogEntry], marker: int) -> int:
    """Index of the first entry with ``id <= marker`` (len(entries) if none).

    Requires `entries` to be sorted by id, descending.
    """
    return bisect_left(entries, True, key=lambda e: e.id <= marker)


def filter_page(page: Sequence[SystemLogEntry], checkpoint: int) -> tuple[list[SystemLogEntry], bool]:
    """Keep the entries with ``id > checkpoint``; report whether the boundary was in `page`."""
    n = first_at_or_below(page, checkpoint)
    return trim_page(page, None if n == len(page) else n)


def merge_pages(existing: Sequence[SystemLogEntry], page: Sequence[SystemLogEntry]) -> list[SystemLogEntry]:
    """Append `page`, dropping every existing entry with ``id <= page[0].id``."""
    return fold_page(existing, page, first_at_or_below)


class SystemLogStore(RecordStore[SystemLogEntry, int]):
    """Accumulator for the system log."""

    kind: ClassVar[LogKind] = "system"
    entry_model = SystemLogEntry
    zero_checkpoint = 0

    filter_page = staticmethod(filter_page)
    merge_pages = staticmethod(merge_pages)

    @staticmethod
    def sort_key(entry: SystemLogEntry) -> int:
        return entry.id

    @classmethod
    def coerce_checkpoint(cls, raw: object) -> int:
        if isinstance(raw, bool):
            raise ValueError(f"system checkpoint must be an integer, got {raw!r}")
        if isinstance(raw, str):
            if not raw.strip().isdigit():
                raise ValueError(f"system checkpoint must be a non-negative integer, got {raw!r}")
            raw = int(raw)
        if not isinstance(raw, int):
            raise ValueError(f"system checkpoint must be an integer, got {type(raw).__name__}")
        if not 0 <= raw <= UINT32_MAX:
            raise ValueError(f"system checkpoint out of range: {raw}")
        return raw
