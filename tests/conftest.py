# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from status_watcher.tasks.snapshot_store import SnapshotStore
from status_watcher.tasks.task_fetcher import TaskFetcher

from .fakes import FakeRecordSource, RecordingSink


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment / .env.
    """

    def require_remote(*, database: bool = True) -> None:
        return None

    return SimpleNamespace(
        app_name="status-watcher-test",
        log_level="INFO",
        data_dir=tmp_path / "data",
        notion_api_key="secret_test",
        notion_database_id="db1",
        notion_page_id="page1",
        notion_timeout_seconds=5.0,
        status_property="Date",
        title_property="Name",
        poll_interval_seconds=0.01,
        require_remote=require_remote,
    )


@pytest.fixture()
def source() -> FakeRecordSource:
    return FakeRecordSource()


@pytest.fixture()
def fetcher(source: FakeRecordSource) -> TaskFetcher:
    return TaskFetcher(source, "db1")


@pytest.fixture()
def store() -> SnapshotStore:
    return SnapshotStore()


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()
