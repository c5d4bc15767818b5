# src/status_watcher/tasks/task_diff.py

from __future__ import annotations

from collections.abc import Iterable

from .snapshot_store import SnapshotStore
from .task_models import Task


def find_updated_tasks(current_tasks: Iterable[Task], store: SnapshotStore) -> list[Task]:
    """
    Return the tasks whose status differs from the snapshot.

    Records seen for the first time are inserted into the store with their current
    status and therefore never count as updated. A record id is considered once;
    later duplicates in the same list are ignored. Updates are not applied here.
    """
    seen: set[str] = set()
    updated: list[Task] = []

    for task in current_tasks:
        if task.record_id in seen:
            continue
        seen.add(task.record_id)

        previous = store.get_or_init(task.record_id, task.status)
        if task.status != previous:
            updated.append(task)

    return updated
