"""Per-kind record stores: filter, merge, sort and serialize one run's entries.

This package provides:
- RecordStore: the shared accumulator contract
- SystemLogStore: numeric ids, boundary search
- SessionLogStore: opaque ids, exact-match scan
- make_store / store_class: lookup by log kind
"""

from __future__ import annotations

from rclogfetch.core.models import LogKind
from rclogfetch.records.base import RecordStore
from rclogfetch.records.session import SessionLogStore
from rclogfetch.records.system import SystemLogStore

_STORES: dict[LogKind, type[RecordStore]] = {
    "system": SystemLogStore,
    "session": SessionLogStore,
}


def store_class(kind: LogKind) -> type[RecordStore]:
    """Return the record store class for `kind`."""
    try:
        return _STORES[kind]
    except KeyError:
        raise ValueError(f"unknown log kind: {kind!r}") from None


def make_store(kind: LogKind, checkpoint: int | str | None = None) -> RecordStore:
    """Create an empty store for `kind` filtering against `checkpoint`."""
    return store_class(kind)(checkpoint)


__all__ = [
    "RecordStore",
    "SessionLogStore",
    "SystemLogStore",
    "make_store",
    "store_class",
]
