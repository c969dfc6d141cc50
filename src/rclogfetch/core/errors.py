"""Error taxonomy for a fetch run.

Every error is terminal for the run: nothing retries, and the stored
checkpoint is left untouched unless the failure happens while writing it.
"""

from __future__ import annotations


class LogFetchError(Exception):
    """Base exception for all expected rc-log-fetch errors."""

    message: str

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CredentialError(LogFetchError):
    """The API rejected the key pair (401/403)."""

    def __init__(self, status_code: int) -> None:
        reason = "unauthorized" if status_code == 401 else "forbidden"
        super().__init__(f"{reason}: check your API key and secret key")
        self.status_code = status_code


class UnexpectedStatusError(LogFetchError):
    """Any other non-200 response."""

    def __init__(self, status_code: int, url: str = "") -> None:
        where = f" ({url})" if url else ""
        super().__init__(f"unexpected status code {status_code} from API{where}")
        self.status_code = status_code
        self.url = url


class DecodeError(LogFetchError):
    """The response body is not a valid page of entries."""


class TransportError(LogFetchError):
    """The request failed before a response was received."""


class PersistenceError(LogFetchError):
    """The checkpoint file could not be read or written."""
