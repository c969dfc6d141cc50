from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rclogfetch.constants import BASE_URL, DEFAULT_PAGE_SIZE, DEFAULT_STATE_FILE
from rclogfetch.core.models import LogKind, OutputFormat, SortOrder


@dataclass(frozen=True)
class ApiConfig:
    """Connection settings for the Redis Cloud API."""

    api_key: str
    secret_key: str
    base_url: str = BASE_URL
    timeout_s: int = 20


@dataclass(frozen=True)
class FetchConfig:
    """Configuration for one incremental fetch run (CLI)."""

    api: ApiConfig
    kind: LogKind = "system"
    page_size: int = DEFAULT_PAGE_SIZE
    output_format: OutputFormat = "json"
    order: SortOrder = "asc"
    state_file: Path = Path(DEFAULT_STATE_FILE)
    checkpoint_override: int | str | None = None  # replaces the stored checkpoint for this run
