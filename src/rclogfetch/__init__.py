from __future__ import annotations

from .core.errors import (
    CredentialError,
    DecodeError,
    LogFetchError,
    PersistenceError,
    TransportError,
    UnexpectedStatusError,
)
from .core.models import SessionLogEntry, SystemLogEntry
from .records import SessionLogStore, SystemLogStore, make_store

__all__ = [
    "make_store",
    "SystemLogStore",
    "SessionLogStore",
    "SystemLogEntry",
    "SessionLogEntry",
    "LogFetchError",
    "CredentialError",
    "UnexpectedStatusError",
    "DecodeError",
    "TransportError",
    "PersistenceError",
]
