"""Core data models, configuration, errors and interfaces.

This package provides:
- Data models (SystemLogEntry, SessionLogEntry and their page envelopes)
- Configuration classes (ApiConfig, FetchConfig)
- The error taxonomy (LogFetchError and subclasses)
"""

from rclogfetch.core.config import ApiConfig, FetchConfig
from rclogfetch.core.errors import (
    CredentialError,
    DecodeError,
    LogFetchError,
    PersistenceError,
    TransportError,
    UnexpectedStatusError,
)
from rclogfetch.core.models import SessionLogEntry, SessionLogPage, SystemLogEntry, SystemLogPage

__all__ = [
    "ApiConfig",
    "FetchConfig",
    "CredentialError",
    "DecodeError",
    "LogFetchError",
    "PersistenceError",
    "TransportError",
    "UnexpectedStatusError",
    "SessionLogEntry",
    "SessionLogPage",
    "SystemLogEntry",
    "SystemLogPage",
]
