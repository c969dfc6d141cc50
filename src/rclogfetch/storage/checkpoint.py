from __future__ import annotations

import logging
import os
from pathlib import Path
from tempfile import mkstemp
from typing import Any

import yaml

from rclogfetch.core.errors import PersistenceError
from rclogfetch.core.models import LogKind

logger = logging.getLogger(__name__)


def atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    """Replace `path` with `text` via a temp file in the same directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = mkstemp(suffix=path.suffix, prefix=path.name + ".tmp", dir=path.parent)
    tmp_path = Path(tmp)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)


class YamlCheckpointStore:
    """Checkpoint file holding the last delivered id per log kind.

    Layout::

        system: 4711
        session: 6a1f0c7e-...

    A missing file is the normal first-run state, not an error.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def read_all(self) -> dict[str, Any]:
        """Return the whole checkpoint mapping (empty if the file does not exist)."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise PersistenceError(f"unable to read state file {self.path}: {e}") from e

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise PersistenceError(f"state file {self.path} is not valid YAML: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise PersistenceError(f"state file {self.path} must contain a mapping, got {type(data).__name__}")
        return data

    def load(self, kind: LogKind) -> int | str | None:
        return self.read_all().get(kind)

    def save(self, kind: LogKind, checkpoint: int | str) -> None:
        data = self.read_all()
        data[kind] = checkpoint
        try:
            atomic_write_text(self.path, yaml.safe_dump(data, default_flow_style=False, sort_keys=True))
        except OSError as e:
            raise PersistenceError(f"unable to write state file {self.path}: {e}") from e
        logger.debug("saved %s checkpoint %r to %s", kind, checkpoint, self.path)
