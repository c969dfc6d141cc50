"""Async client for the Redis Cloud audit log endpoints.

This module provides:
- `CloudLogsAPI`: an async client with sane timeouts/connection limits
- `page_params`: helper building the pagination query string

It returns `SystemLogEntry` / `SessionLogEntry` records ready for filtering.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from rclogfetch.constants import RESOURCES
from rclogfetch.core.config import ApiConfig
from rclogfetch.core.errors import CredentialError, DecodeError, TransportError, UnexpectedStatusError
from rclogfetch.core.models import PAGE_MODELS, LogEntry, LogKind

logger = logging.getLogger(__name__)


def page_params(offset: int, limit: int) -> dict[str, str]:
    """Format the pagination query parameters."""
    return {"offset": str(offset), "limit": str(limit)}


class CloudLogsAPI:
    """Minimal async Redis Cloud logs client.

    Parameters
    ----------
    config : ApiConfig
        Credentials, base URL and per-operation timeout.
    max_connections : int
        Maximum connections to keep in the pool. Pages are fetched one at a
        time, so a small pool is enough.
    transport : httpx.AsyncBaseTransport | None
        Optional transport override (e.g. `httpx.MockTransport` in tests).
    """

    def __init__(
        self,
        config: ApiConfig,
        *,
        max_connections: int = 4,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = config.base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            headers={
                "x-api-key": config.api_key,
                "x-api-secret-key": config.secret_key,
                "accept": "application/json",
            },
            timeout=httpx.Timeout(
                connect=config.timeout_s,
                read=config.timeout_s,
                write=config.timeout_s,
                pool=max(30, config.timeout_s * 3),
            ),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max(1, max_connections // 2),
            ),
            http2=True,
            transport=transport,
        )

    def url_for(self, kind: LogKind) -> str:
        """Return the endpoint URL of the `kind` log."""
        return f"{self.base_url}/{RESOURCES[kind]}"

    async def fetch_page(self, kind: LogKind, *, offset: int, limit: int) -> list[LogEntry]:
        """Fetch one page of the `kind` log, newest entries first."""
        url = self.url_for(kind)
        try:
            async with self.client.stream("GET", url, params=page_params(offset, limit)) as r:
                if r.status_code in (httpx.codes.UNAUTHORIZED, httpx.codes.FORBIDDEN):
                    raise CredentialError(r.status_code)
                if r.status_code != httpx.codes.OK:
                    raise UnexpectedStatusError(r.status_code, url)
                body = await r.aread()
        except httpx.HTTPError as e:
            raise TransportError(f"request to {url} failed: {type(e).__name__}: {e}") from e

        try:
            page = PAGE_MODELS[kind].model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(f"malformed {kind} log page at offset {offset}: {e}") from e

        logger.debug("fetched %d %s entries (offset=%d, limit=%d)", len(page.entries), kind, offset, limit)
        return list(page.entries)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()
