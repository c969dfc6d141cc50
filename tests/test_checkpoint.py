from pathlib import Path

import pytest
import yaml

from rclogfetch.core.errors import PersistenceError
from rclogfetch.core.interfaces import ICheckpointRepository
from rclogfetch.storage.checkpoint import YamlCheckpointStore, atomic_write_text


def test_missing_file_means_no_state(tmp_path: Path):
    store = YamlCheckpointStore(tmp_path / "state.yaml")
    assert store.load("system") is None
    assert store.load("session") is None
    assert isinstance(store, ICheckpointRepository)


def test_save_then_load_keeps_other_kind(tmp_path: Path):
    path = tmp_path / "nested" / "state.yaml"
    store = YamlCheckpointStore(path)

    store.save("system", 4711)
    store.save("session", "6a1f0c7e-0d35")

    assert store.load("system") == 4711
    assert store.load("session") == "6a1f0c7e-0d35"
    assert yaml.safe_load(path.read_text()) == {"system": 4711, "session": "6a1f0c7e-0d35"}


def test_empty_file_means_no_state(tmp_path: Path):
    path = tmp_path / "state.yaml"
    path.write_text("")
    assert YamlCheckpointStore(path).load("system") is None


def test_invalid_yaml_is_persistence_error(tmp_path: Path):
    path = tmp_path / "state.yaml"
    path.write_text("system: [unclosed\n")
    with pytest.raises(PersistenceError):
        YamlCheckpointStore(path).load("system")


def test_non_mapping_is_persistence_error(tmp_path: Path):
    path = tmp_path / "state.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(PersistenceError):
        YamlCheckpointStore(path).load("system")


def test_directory_in_place_of_file_is_persistence_error(tmp_path: Path):
    path = tmp_path / "state.yaml"
    path.mkdir()
    store = YamlCheckpointStore(path)
    with pytest.raises(PersistenceError):
        store.load("system")


def test_write_failure_is_persistence_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    def boom(*args, **kwargs):
        raise PermissionError("read-only file system")

    monkeypatch.setattr("rclogfetch.storage.checkpoint.atomic_write_text", boom)
    with pytest.raises(PersistenceError):
        YamlCheckpointStore(tmp_path / "state.yaml").save("system", 1)


def test_atomic_write_leaves_no_temp_files(tmp_path: Path):
    path = tmp_path / "state.yaml"
    atomic_write_text(path, "system: 1\n")
    atomic_write_text(path, "system: 2\n")
    assert path.read_text() == "system: 2\n"
    assert [p.name for p in tmp_path.iterdir()] == ["state.yaml"]
