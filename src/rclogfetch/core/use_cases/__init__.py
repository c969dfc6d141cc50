"""Application use cases built on the core interfaces."""

from rclogfetch.core.use_cases.sync import SyncConfig, SyncService, SyncStats

__all__ = ["SyncConfig", "SyncService", "SyncStats"]
