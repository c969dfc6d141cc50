"""Storage components for checkpoint persistence.

This package provides:
- YamlCheckpointStore: per-kind checkpoint file, written atomically
"""

from rclogfetch.storage.checkpoint import YamlCheckpointStore

__all__ = [
    "YamlCheckpointStore",
]
