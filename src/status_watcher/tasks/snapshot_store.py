# src/status_watcher/tasks/snapshot_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable

from .task_models import Task

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    In-memory map of record id -> last known status.

    Lifecycle:
    - seeded in bulk from the first full fetch,
    - updated one entry at a time as changes are applied,
    - never shrinks: records that disappear remotely keep their last status.

    Not persisted; the poller owns the only instance.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._statuses: dict[str, str] = dict(initial or {})

    def __len__(self) -> int:
        return len(self._statuses)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._statuses

    def get(self, record_id: str) -> str | None:
        return self._statuses.get(record_id)

    def get_or_init(self, record_id: str, candidate_status: str) -> str:
        """
        Return the stored status; on first sight store candidate_status and return it.

        Known records are never updated here.
        """
        if record_id not in self._statuses:
            self._statuses[record_id] = candidate_status
            logger.debug("New record %s seen with status %r", record_id, candidate_status)
        return self._statuses[record_id]

    def set(self, record_id: str, status: str) -> None:
        self._statuses[record_id] = status

    def seed(self, tasks: Iterable[Task]) -> int:
        n = 0
        for task in tasks:
            self._statuses[task.record_id] = task.status
            n += 1
        return n

    def as_dict(self) -> dict[str, str]:
        return dict(self._statuses)
