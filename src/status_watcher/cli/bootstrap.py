# src/status_watcher/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- validates settings once,
- ensures the local (gitignored) data directory exists,
- wires the Notion client, fetcher, snapshot store and poller into WatcherState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import NotifySink
from ..core.state import WatcherState
from ..notion.client import NotionGateway, build_notion_client
from ..tasks.snapshot_store import SnapshotStore
from ..tasks.task_fetcher import TaskFetcher
from ..tasks.task_poller import TaskPoller

logger = logging.getLogger(__name__)


def create_gateway(*, settings=None) -> NotionGateway:
    if settings is None:
        settings = get_settings()
    return NotionGateway(build_notion_client(settings))


def create_watcher(*, settings=None, sink: NotifySink | None = None) -> WatcherState:
    """
    Build a WatcherState from the provided settings.

    Raises ConfigurationError when credentials or the database id are missing,
    before anything talks to the network.
    """
    if settings is None:
        settings = get_settings()

    settings.require_remote(database=True)
    settings.data_dir.mkdir(parents=True, exist_ok=True)

    gateway = create_gateway(settings=settings)
    fetcher = TaskFetcher(
        gateway,
        settings.notion_database_id,
        status_property=settings.status_property,
        title_property=settings.title_property,
    )
    store = SnapshotStore()
    poller = TaskPoller(fetcher, store, sink, interval_seconds=settings.poll_interval_seconds)

    logger.info(
        "Watching database %s (status=%r title=%r every %.1fs)",
        settings.notion_database_id,
        settings.status_property,
        settings.title_property,
        poller.interval_seconds,
    )
    return WatcherState(settings=settings, gateway=gateway, store=store, poller=poller)
