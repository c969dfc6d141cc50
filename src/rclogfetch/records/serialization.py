"""Output encodings for a run's entries.

- JSON: one pretty-printed array (2-space indent, API field names).
- CSV: a header row of the API field names, then one row per entry.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

import pandas as pd
from pydantic import BaseModel, TypeAdapter

from rclogfetch.core.models import OutputFormat, column_names


def to_json(entries: Sequence[BaseModel], entry_model: type[BaseModel]) -> str:
    """Render entries as a JSON array document."""
    raw = TypeAdapter(list[entry_model]).dump_json(list(entries), indent=2, by_alias=True)
    return raw.decode("utf-8") + "\n"


def to_frame(entries: Sequence[BaseModel], entry_model: type[BaseModel]) -> pd.DataFrame:
    """Tabular view of entries; fields omitted from the JSON form become empty cells."""
    rows = [e.model_dump(mode="json", by_alias=True) for e in entries]
    return pd.DataFrame(rows, columns=column_names(entry_model))


def write_entries(
    out: TextIO,
    entries: Sequence[BaseModel],
    entry_model: type[BaseModel],
    fmt: OutputFormat,
) -> None:
    """Write `entries` to `out` in the requested format."""
    if fmt == "json":
        out.write(to_json(entries, entry_model))
    elif fmt == "csv":
        to_frame(entries, entry_model).to_csv(out, index=False, lineterminator="\n")
    else:
        raise ValueError(f"unknown output format: {fmt!r}")


def parse_json(text: str | bytes, entry_model: type[BaseModel]) -> list[BaseModel]:
    """Parse a document produced by `to_json` back into entries."""
    return TypeAdapter(list[entry_model]).validate_json(text)
