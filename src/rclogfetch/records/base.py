"""Accumulator shared by both log kinds.

A `RecordStore` owns the entries collected during one run and the checkpoint
they are filtered against. Each subclass supplies the pure `filter_page` /
`merge_pages` functions of its module, which differ only in how a position is
located (boundary search or equality scan). Sorting, serialization and the
checkpoint bookkeeping live here.

Pages and the accumulator are always newest first until `sort` is called.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any, ClassVar, Generic, TextIO, TypeVar

from pydantic import BaseModel

from rclogfetch.core.models import LogKind, OutputFormat, SortOrder
from rclogfetch.records.serialization import write_entries

EntryT = TypeVar("EntryT", bound=BaseModel)
IdT = TypeVar("IdT", int, str)


def trim_page(page: Sequence[EntryT], boundary: int | None) -> tuple[list[EntryT], bool]:
    """Keep the entries before `boundary`; None means the checkpoint is not in the page."""
    if boundary is None:
        return list(page), False
    return list(page[:boundary]), True


def fold_page(
    existing: Sequence[EntryT],
    page: Sequence[EntryT],
    locate: Callable[[Sequence[EntryT], Any], int],
) -> list[EntryT]:
    """Append `page` to `existing`, cutting `existing` where `page`'s head already appears.

    `locate(existing, head_id)` returns the cut position (len(existing) when
    the pages do not overlap).
    """
    if not existing:
        return list(page)
    if not page:
        return list(existing)
    n = locate(existing, page[0].id)
    return [*existing[:n], *page]


class RecordStore(ABC, Generic[EntryT, IdT]):
    """Ordered, deduplicated collection of one run's entries for a log kind."""

    kind: ClassVar[LogKind]
    entry_model: ClassVar[type[BaseModel]]
    zero_checkpoint: ClassVar[int | str]

    def __init__(self, checkpoint: IdT | None = None) -> None:
        raw = self.zero_checkpoint if checkpoint is None else checkpoint
        self._checkpoint: IdT = self.coerce_checkpoint(raw)
        self._entries: list[EntryT] = []
        self._head_id: IdT | None = None

    # -- variant hooks ------------------------------------------------------

    @classmethod
    @abstractmethod
    def coerce_checkpoint(cls, raw: object) -> IdT:
        """Validate a raw persisted/CLI value; raise ValueError if unusable."""

    @staticmethod
    @abstractmethod
    def filter_page(page: Sequence[EntryT], checkpoint: IdT) -> tuple[list[EntryT], bool]:
        ...

    @staticmethod
    @abstractmethod
    def merge_pages(existing: Sequence[EntryT], page: Sequence[EntryT]) -> list[EntryT]:
        ...

    @staticmethod
    @abstractmethod
    def sort_key(entry: EntryT) -> Any:
        ...

    # -- checkpoint ---------------------------------------------------------

    @property
    def checkpoint(self) -> IdT:
        """Identifier of the newest entry delivered by the previous run."""
        return self._checkpoint

    def set_checkpoint(self, checkpoint: IdT) -> None:
        self._checkpoint = self.coerce_checkpoint(checkpoint)

    def latest_checkpoint(self) -> IdT:
        """Checkpoint to persist after this run.

        The head of the accumulator as of the last merge, so a later ascending
        sort does not change it. Falls back to the previous checkpoint when
        nothing new was retrieved.
        """
        return self._checkpoint if self._head_id is None else self._head_id

    # -- fetch-time operations ----------------------------------------------

    def filter(self, page: Sequence[EntryT]) -> tuple[list[EntryT], bool]:
        """Trim `page` to the entries newer than the checkpoint.

        Returns the kept prefix and whether the checkpoint was located in this
        page. Not found with an empty result means the page itself was empty.
        """
        return self.filter_page(page, self._checkpoint)

    def merge(self, page: Sequence[EntryT]) -> None:
        """Fold a filtered page into the accumulator, dropping any overlap."""
        self._entries = self.merge_pages(self._entries, page)
        if self._entries:
            self._head_id = self._entries[0].id

    # -- output -------------------------------------------------------------

    def sort(self, order: SortOrder) -> None:
        """Stable in-place reorder; only called once fetching is complete."""
        self._entries.sort(key=self.sort_key, reverse=(order == "desc"))

    def serialize(self, out: TextIO, fmt: OutputFormat) -> bool:
        """Write the accumulator to `out`. Returns False if there was nothing to write."""
        if not self._entries:
            return False
        write_entries(out, self._entries, self.entry_model, fmt)
        return True

    @property
    def entries(self) -> tuple[EntryT, ...]:
        return tuple(self._entries)

    def size(self) -> int:
        """Number of entries currently held."""
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(checkpoint={self._checkpoint!r}, size={len(self._entries)})"
