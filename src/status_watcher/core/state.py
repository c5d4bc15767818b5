# src/status_watcher/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..notion.client import NotionGateway
from ..tasks.snapshot_store import SnapshotStore
from ..tasks.task_poller import TaskPoller


@dataclass
class WatcherState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    gateway: NotionGateway
    store: SnapshotStore
    poller: TaskPoller

    async def aclose(self) -> None:
        try:
            await self.poller.stop()
        finally:
            await self.gateway.aclose()
