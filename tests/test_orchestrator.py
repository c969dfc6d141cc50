import io
import json
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from rclogfetch.core.config import ApiConfig, FetchConfig
from rclogfetch.core.errors import PersistenceError, UnexpectedStatusError
from rclogfetch.orchestration.orchestrator import fetch_new_entries
from rclogfetch.storage.checkpoint import YamlCheckpointStore

API = ApiConfig(api_key="k", secret_key="s")


def make_config(tmp_path: Path, **overrides: Any) -> FetchConfig:
    return FetchConfig(api=API, state_file=tmp_path / "state.yaml", **overrides)


@pytest.mark.asyncio
async def test_new_entries_are_written_ascending_and_checkpoint_saved(tmp_path, mock_api, system_entry):
    repo = YamlCheckpointStore(tmp_path / "state.yaml")
    repo.save("system", 5)
    mock_api.fetch_page.side_effect = [[system_entry(i) for i in (9, 8, 7, 6, 5, 4)]]
    out = io.StringIO()

    result = await fetch_new_entries(
        config=make_config(tmp_path, page_size=6),
        logs_provider=mock_api,
        checkpoint_repo=repo,
        out=out,
    )

    assert [e["id"] for e in json.loads(out.getvalue())] == [6, 7, 8, 9]
    assert result.entries == 4
    assert result.previous_checkpoint == 5
    assert result.checkpoint == 9
    assert result.written
    assert repo.load("system") == 9


@pytest.mark.asyncio
async def test_descending_csv_output(tmp_path, mock_api, session_entry):
    mock_api.fetch_page.side_effect = [[session_entry("sess-n", 2), session_entry("sess-m", 1)], []]
    out = io.StringIO()
    repo = YamlCheckpointStore(tmp_path / "state.yaml")

    result = await fetch_new_entries(
        config=make_config(tmp_path, kind="session", output_format="csv", order="desc"),
        logs_provider=mock_api,
        checkpoint_repo=repo,
        out=out,
    )

    lines = out.getvalue().splitlines()
    assert lines[0].startswith("id,time,user")
    assert [line.split(",")[0] for line in lines[1:]] == ["sess-n", "sess-m"]
    assert result.checkpoint == "sess-n"
    assert repo.load("session") == "sess-n"


@pytest.mark.asyncio
async def test_no_new_entries_skips_output_and_checkpoint(tmp_path, mock_api):
    repo = MagicMock()
    repo.load.return_value = 30
    out = io.StringIO()

    result = await fetch_new_entries(
        config=make_config(tmp_path),
        logs_provider=mock_api,
        checkpoint_repo=repo,
        out=out,
    )

    assert out.getvalue() == ""
    assert result.entries == 0
    assert result.checkpoint == 30
    assert not result.written
    repo.save.assert_not_called()


@pytest.mark.asyncio
async def test_override_wins_over_stored_checkpoint(tmp_path, mock_api, system_entry):
    repo = MagicMock()
    repo.load.return_value = 1
    mock_api.fetch_page.side_effect = [[system_entry(i) for i in (9, 8, 7)]]

    result = await fetch_new_entries(
        config=make_config(tmp_path, checkpoint_override=8),
        logs_provider=mock_api,
        checkpoint_repo=repo,
        out=io.StringIO(),
    )

    assert result.entries == 1
    repo.load.assert_not_called()
    repo.save.assert_called_once_with("system", 9)


@pytest.mark.asyncio
async def test_fetch_error_leaves_checkpoint_untouched(tmp_path, mock_api, system_entry):
    repo = MagicMock()
    repo.load.return_value = None
    mock_api.fetch_page.side_effect = [[system_entry(3)], UnexpectedStatusError(502)]
    out = io.StringIO()

    with pytest.raises(UnexpectedStatusError):
        await fetch_new_entries(config=make_config(tmp_path), logs_provider=mock_api, checkpoint_repo=repo, out=out)

    assert out.getvalue() == ""
    repo.save.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_stored_checkpoint(tmp_path, mock_api):
    repo = MagicMock()
    repo.load.return_value = "not-a-number"

    with pytest.raises(PersistenceError):
        await fetch_new_entries(config=make_config(tmp_path), logs_provider=mock_api, checkpoint_repo=repo, out=io.StringIO())
    mock_api.fetch_page.assert_not_called()


@pytest.mark.asyncio
async def test_save_failure_happens_after_output(tmp_path, mock_api, system_entry):
    repo = MagicMock()
    repo.load.return_value = None
    repo.save.side_effect = PersistenceError("disk full")
    mock_api.fetch_page.side_effect = [[system_entry(2), system_entry(1)], []]
    out = io.StringIO()

    with pytest.raises(PersistenceError):
        await fetch_new_entries(config=make_config(tmp_path), logs_provider=mock_api, checkpoint_repo=repo, out=out)

    assert [e["id"] for e in json.loads(out.getvalue())] == [1, 2]


@pytest.mark.asyncio
async def test_second_run_only_returns_newer_entries(tmp_path, mock_api, system_entry):
    repo = YamlCheckpointStore(tmp_path / "state.yaml")
    config = make_config(tmp_path, page_size=3)

    mock_api.fetch_page.side_effect = [[system_entry(i) for i in (3, 2, 1)], []]
    first = io.StringIO()
    await fetch_new_entries(config=config, logs_provider=mock_api, checkpoint_repo=repo, out=first)

    mock_api.fetch_page.side_effect = [[system_entry(i) for i in (5, 4, 3)]]
    second = io.StringIO()
    await fetch_new_entries(config=config, logs_provider=mock_api, checkpoint_repo=repo, out=second)

    assert [e["id"] for e in json.loads(first.getvalue())] == [1, 2, 3]
    assert [e["id"] for e in json.loads(second.getvalue())] == [4, 5]
    assert repo.load("system") == 5
