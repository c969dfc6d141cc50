from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from rclogfetch.core.models import SessionLogEntry, SystemLogEntry

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def system_entry():
    def make(entry_id: int, **fields) -> SystemLogEntry:
        return SystemLogEntry(
            id=entry_id,
            time=T0 + timedelta(minutes=entry_id),
            description=fields.pop("description", f"event {entry_id}"),
            **fields,
        )

    return make


@pytest.fixture
def session_entry():
    def make(entry_id: str, minute: int = 0, **fields) -> SessionLogEntry:
        return SessionLogEntry(id=entry_id, time=T0 + timedelta(minutes=minute), **fields)

    return make


@pytest.fixture
def mock_api():
    api = AsyncMock()
    api.fetch_page = AsyncMock(return_value=[])
    api.aclose = AsyncMock()
    return api
