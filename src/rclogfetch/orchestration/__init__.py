"""Orchestration of one incremental fetch run.

This package provides:
- fetch_new_entries: checkpoint in, new entries out, checkpoint persisted
"""

from rclogfetch.orchestration.orchestrator import FetchOutput, fetch_new_entries

__all__ = [
    "FetchOutput",
    "fetch_new_entries",
]
