# tests/test_cli.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from status_watcher.cli import main as cli_main
from status_watcher.cli.bootstrap import create_watcher
from status_watcher.core.state import WatcherState
from status_watcher.errors import ConfigurationError, TransientAPIError
from status_watcher.tasks.snapshot_store import SnapshotStore
from status_watcher.tasks.task_fetcher import TaskFetcher
from status_watcher.tasks.task_poller import PollerState, TaskPoller

from .fakes import FakeRecordSource


class _FakeGateway:
    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.closed = False

    async def create_database(self, parent_page_id: str, title: str) -> dict:
        self.calls.append(("create_database", parent_page_id, title))
        return {"id": "db9"}

    async def create_comment(self, page_id: str, text: str) -> dict:
        self.calls.append(("create_comment", page_id, text))
        return {"id": "c9"}

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture()
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_main, "setup_logging", lambda **_: None)


def test_parser_defaults_to_watch() -> None:
    parser = cli_main.build_parser()
    assert parser.parse_args([]).command is None
    args = parser.parse_args(["create-page", "db1", "Write docs", "--header", "Notes"])
    assert (args.database_id, args.name, args.header) == ("db1", "Write docs", "Notes")


def test_missing_configuration_exits_with_error(
    monkeypatch: pytest.MonkeyPatch,
    settings: SimpleNamespace,
    quiet_logging: None,
) -> None:
    def require_remote(*, database: bool = True) -> None:
        raise ConfigurationError("Missing configuration: WATCHER_NOTION_API_KEY")

    settings.require_remote = require_remote
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)

    assert cli_main.main([]) == 1
    assert cli_main.main(["comment", "p1", "hi"]) == 1


def test_passthrough_prints_response(
    monkeypatch: pytest.MonkeyPatch,
    settings: SimpleNamespace,
    quiet_logging: None,
    capsys: pytest.CaptureFixture[str],
) -> None:
    gateway = _FakeGateway()
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    monkeypatch.setattr(cli_main, "create_gateway", lambda **_: gateway)

    assert cli_main.main(["create-database", "Tasks"]) == 0

    assert gateway.calls == [("create_database", "page1", "Tasks")]
    assert gateway.closed
    assert '"success!"' in capsys.readouterr().out


@pytest.mark.asyncio
async def test_create_database_needs_parent(settings: SimpleNamespace, monkeypatch: pytest.MonkeyPatch) -> None:
    gateway = _FakeGateway()
    monkeypatch.setattr(cli_main, "create_gateway", lambda **_: gateway)
    settings.notion_page_id = None
    args = cli_main.build_parser().parse_args(["create-database", "Tasks"])

    with pytest.raises(ConfigurationError):
        await cli_main.run_passthrough(settings, args)
    assert gateway.closed


@pytest.mark.asyncio
async def test_bootstrap_wires_poller(settings: SimpleNamespace) -> None:
    state = create_watcher(settings=settings)
    try:
        assert state.poller.state == PollerState.UNINITIALIZED
        assert state.poller.store is state.store
        assert state.poller.interval_seconds == pytest.approx(0.01)
        assert settings.data_dir.is_dir()
    finally:
        await state.aclose()


@pytest.mark.asyncio
async def test_aclose_closes_gateway_after_failed_start() -> None:
    source = FakeRecordSource()
    source.fail_queries = True
    poller = TaskPoller(TaskFetcher(source, "db1"), SnapshotStore(), interval_seconds=0.01)
    gateway = _FakeGateway()
    state = WatcherState(settings=SimpleNamespace(), gateway=gateway, store=poller.store, poller=poller)

    with pytest.raises(TransientAPIError):
        await poller.run_forever()
    await state.aclose()

    assert gateway.closed
    assert poller.state == PollerState.STOPPED
