from __future__ import annotations

from typing import Protocol, runtime_checkable

from rclogfetch.core.models import LogEntry, LogKind


# ---------------------------------------------------------------------------
# ILogPageProvider
# ---------------------------------------------------------------------------

@runtime_checkable
class ILogPageProvider(Protocol):
    """
    Abstract provider for one page of audit log entries.

    Domain expectations:
    - Pages are returned newest first, already parsed into entry models.
    - Consecutive offsets return consecutive reverse-chronological slices; a
      later page may repeat entries from the previous one when the log grew
      between requests.
    - An empty list means the log is exhausted at this offset.
    """

    async def fetch_page(self, kind: LogKind, *, offset: int, limit: int) -> list[LogEntry]:
        """
        Return at most `limit` entries of the `kind` log, starting at `offset`.

        Implementations:
        - `CloudLogsAPI` (Redis Cloud REST API)
        - In-memory or scripted provider for testing
        """
        ...


# ---------------------------------------------------------------------------
# ICheckpointRepository
# ---------------------------------------------------------------------------

@runtime_checkable
class ICheckpointRepository(Protocol):
    """
    Durable storage of the last delivered identifier per log kind.

    Domain expectations:
    - A missing record means "no prior state" and is not an error.
    - Values are returned raw; the record store for the kind validates them.
    """

    def load(self, kind: LogKind) -> int | str | None:
        """Return the stored checkpoint for `kind`, or None if there is none."""
        ...

    def save(self, kind: LogKind, checkpoint: int | str) -> None:
        """Persist the checkpoint for `kind`, keeping the other kinds intact."""
        ...
