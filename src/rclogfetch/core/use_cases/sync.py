from __future__ import annotations

import logging
from dataclasses import dataclass

from rclogfetch.core.interfaces import ILogPageProvider
from rclogfetch.records.base import RecordStore

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Domain configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SyncConfig:
    """
    Domain-level configuration for the sync use case.

    Free of infrastructure concerns (no URL, no credentials, no paths).
    """

    page_size: int


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class SyncStats:
    """
    Counters for one sync run.

    - pages_fetched: requests that returned a page (including the final empty one)
    - entries_received: entries across all pages, before filtering
    - entries_kept: entries newer than the checkpoint, before overlap removal
    - checkpoint_found: whether the run stopped at the checkpoint rather than
      at the end of the log
    """

    pages_fetched: int = 0
    entries_received: int = 0
    entries_kept: int = 0
    checkpoint_found: bool = False


# ---------------------------------------------------------------------------
# Domain service - SyncService
# ---------------------------------------------------------------------------


class SyncService:
    """
    Pages through a log, newest first, until the checkpoint or the end of the
    log is reached, folding every page into a record store.

    One request is outstanding at a time. Any provider error propagates
    unchanged and leaves the store's accumulated entries to be discarded by
    the caller.
    """

    def __init__(self, logs_provider: ILogPageProvider) -> None:
        self._logs_provider = logs_provider

    async def run(self, *, config: SyncConfig, store: RecordStore) -> SyncStats:
        """
        Fill `store` with every entry newer than its checkpoint.

        Parameters
        ----------
        config : SyncConfig
            Page size used both as the request limit and the offset step.
        store : RecordStore
            Empty store carrying the starting checkpoint for its log kind.
        """
        stats = SyncStats()
        offset = 0

        while True:
            page = await self._logs_provider.fetch_page(store.kind, offset=offset, limit=config.page_size)
            stats.pages_fetched += 1
            stats.entries_received += len(page)

            kept, found = store.filter(page)
            store.merge(kept)
            stats.entries_kept += len(kept)

            logger.debug(
                "%s log offset=%d: received=%d kept=%d found=%s",
                store.kind, offset, len(page), len(kept), found,
            )

            if found or not kept:
                stats.checkpoint_found = found
                return stats

            offset += config.page_size
