"""Core data models for the Redis Cloud audit logs.

This module defines:
- `SystemLogEntry`: one record of the system log (numeric, ordered `id`).
- `SessionLogEntry`: one record of the session log (opaque string `id`).
- `SystemLogPage` / `SessionLogPage`: the `{"entries": [...]}` response body
  returned by one paginated API call.

Design notes
------------
- Attribute names are snake_case; the API (and every output encoding) uses
  the camelCase aliases, so models are always dumped with ``by_alias=True``.
- Entries are frozen: nothing downstream of the transport mutates them.
- The system log omits its empty optional fields from JSON output.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, SerializationInfo, SerializerFunctionWrapHandler, field_validator, model_serializer

LogKind = Literal["system", "session"]
SortOrder = Literal["asc", "desc"]
OutputFormat = Literal["json", "csv"]

_ENTRY_CONFIG = ConfigDict(frozen=True, populate_by_name=True)

# JSON keys dropped from system entries when empty
_SYSTEM_OMIT_EMPTY = ("originator", "apiKeyName", "resource", "type")


def _as_utc(value: datetime) -> datetime:
    """Timestamps without an offset are UTC, like the rest of the API."""
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


# === Entries ===


class SystemLogEntry(BaseModel):
    """A system log record. `id` increases with insertion order."""

    model_config = _ENTRY_CONFIG

    id: int
    timestamp: datetime = Field(alias="time")
    originator: str = ""
    api_key_name: str = Field(default="", alias="apiKeyName")
    resource: str = ""
    type: str = ""
    description: str = ""

    @field_validator("timestamp")
    @classmethod
    def _utc_timestamp(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: SerializerFunctionWrapHandler, info: SerializationInfo) -> dict[str, Any]:
        data = handler(self)
        if info.mode_is_json():
            for key in _SYSTEM_OMIT_EMPTY:
                if data.get(key) == "":
                    del data[key]
        return data


class SessionLogEntry(BaseModel):
    """A session log record. `id` is a generated unique string with no order."""

    model_config = _ENTRY_CONFIG

    id: str
    timestamp: datetime = Field(alias="time")
    user: str = ""
    user_agent: str = Field(default="", alias="userAgent")
    ip_address: str = Field(default="", alias="ipAddress")
    user_role: str = Field(default="", alias="userRole")
    type: str = ""
    action: str = ""

    @field_validator("timestamp")
    @classmethod
    def _utc_timestamp(cls, value: datetime) -> datetime:
        return _as_utc(value)


LogEntry = SystemLogEntry | SessionLogEntry


# === Pages ===


class SystemLogPage(BaseModel):
    """Response body of `GET /logs`."""

    entries: list[SystemLogEntry] = Field(default_factory=list)


class SessionLogPage(BaseModel):
    """Response body of `GET /session-logs`."""

    entries: list[SessionLogEntry] = Field(default_factory=list)


PAGE_MODELS: dict[LogKind, type[SystemLogPage] | type[SessionLogPage]] = {
    "system": SystemLogPage,
    "session": SessionLogPage,
}


def column_names(entry_model: type[BaseModel]) -> list[str]:
    """Return the wire names of an entry model's fields, in declaration order."""
    return [f.alias or name for name, f in entry_model.model_fields.items()]
