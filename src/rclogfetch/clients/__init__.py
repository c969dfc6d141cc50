"""HTTP clients for remote log sources."""

from rclogfetch.clients.cloud_api import CloudLogsAPI

__all__ = ["CloudLogsAPI"]
