"""Run orchestrator: checkpoint → sync → sort → serialize → checkpoint.

This module provides the pure application layer:

- `fetch_new_entries(...)`:
  - Depends ONLY on interfaces (ILogPageProvider, ICheckpointRepository).
  - Does NOT instantiate the API client or the checkpoint file.
  - Does NOT manage lifecycle (e.g., closing the client).

Concrete wiring lives in `rclogfetch.api.fetch_logs`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TextIO

from rclogfetch.core.config import FetchConfig
from rclogfetch.core.errors import PersistenceError
from rclogfetch.core.interfaces import ICheckpointRepository, ILogPageProvider
from rclogfetch.core.use_cases.sync import SyncConfig, SyncService, SyncStats
from rclogfetch.records import RecordStore, make_store

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class FetchOutput:
    """High-level output of one run."""

    stats: SyncStats
    entries: int
    previous_checkpoint: int | str
    checkpoint: int | str
    written: bool


def _resolve_checkpoint(config: FetchConfig, checkpoint_repo: ICheckpointRepository) -> RecordStore:
    """Build the run's store from the override, the stored value, or the kind's zero value."""
    if config.checkpoint_override is not None:
        logger.info("using checkpoint override %r for the %s log", config.checkpoint_override, config.kind)
        return make_store(config.kind, config.checkpoint_override)

    raw = checkpoint_repo.load(config.kind)
    if raw is None:
        logger.info("no stored checkpoint for the %s log, fetching from the start", config.kind)
        return make_store(config.kind)
    try:
        return make_store(config.kind, raw)
    except ValueError as e:
        raise PersistenceError(f"invalid stored {config.kind} checkpoint: {e}") from e


async def fetch_new_entries(
    *,
    config: FetchConfig,
    logs_provider: ILogPageProvider,
    checkpoint_repo: ICheckpointRepository,
    out: TextIO,
) -> FetchOutput:
    """Pure application-layer run.

    This function:
    - Resolves the starting checkpoint.
    - Runs the sync loop until the checkpoint or the end of the log.
    - Sorts and writes the new entries to `out`.
    - Persists the new checkpoint, only after the output was written and only
      if at least one new entry was retrieved.

    Any error before the output is written leaves the checkpoint untouched.
    """
    # 1) Starting point
    store = _resolve_checkpoint(config, checkpoint_repo)
    previous = store.checkpoint

    # 2) Sync loop
    service = SyncService(logs_provider)
    stats = await service.run(config=SyncConfig(page_size=config.page_size), store=store)

    if store.size() == 0:
        logger.info("no new %s log entries since %r", config.kind, previous)
        return FetchOutput(
            stats=stats,
            entries=0,
            previous_checkpoint=previous,
            checkpoint=previous,
            written=False,
        )

    # 3) Output (the newest id is captured before sorting reorders the entries)
    latest = store.latest_checkpoint()
    store.sort(config.order)
    store.serialize(out, config.output_format)
    out.flush()
    logger.info("wrote %d %s log entries (%s, %s)", store.size(), config.kind, config.output_format, config.order)

    # 4) Checkpoint
    checkpoint_repo.save(config.kind, latest)

    return FetchOutput(
        stats=stats,
        entries=store.size(),
        previous_checkpoint=previous,
        checkpoint=latest,
        written=True,
    )
