from __future__ import annotations

from typing import TextIO

from rclogfetch.clients.cloud_api import CloudLogsAPI
from rclogfetch.core.config import FetchConfig
from rclogfetch.orchestration.orchestrator import FetchOutput, fetch_new_entries
from rclogfetch.storage.checkpoint import YamlCheckpointStore


async def fetch_logs(
    *,
    config: FetchConfig,
    out: TextIO,
) -> FetchOutput:
    """
    High-level convenience API for the CLI / scripts.
    Wires the Redis Cloud client and the YAML checkpoint file.
    """
    api = CloudLogsAPI(config.api)
    checkpoint_repo = YamlCheckpointStore(config.state_file)

    try:
        return await fetch_new_entries(
            config=config,
            logs_provider=api,
            checkpoint_repo=checkpoint_repo,
            out=out,
        )
    finally:
        await api.aclose()
