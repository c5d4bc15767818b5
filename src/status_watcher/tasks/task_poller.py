# src/status_watcher/tasks/task_poller.py

from __future__ import annotations

"""
Task poller.

Keeps a snapshot of every record's status and, on a fixed interval:
- fetches all tasks,
- diffs them against the snapshot,
- applies each change to the snapshot and hands it to the notify sink.

The first full fetch only seeds the snapshot (no notifications). Ticks that fire
while the previous cycle is still running are skipped, so two cycles never
touch the snapshot at the same time.
"""

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from enum import StrEnum

from ..connectors.notify_sinks import LoggingNotifySink
from ..core.ports import NotifySink
from .snapshot_store import SnapshotStore
from .task_diff import find_updated_tasks
from .task_fetcher import TaskFetcher
from .task_models import NO_STATUS, StatusChange

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 10.0
MIN_INTERVAL_SECONDS = 0.01


class PollerState(StrEnum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    CYCLE_RUNNING = "cycle_running"
    STOPPED = "stopped"


@dataclass(slots=True, frozen=True)
class CycleResult:
    fetched: int = 0
    changes: tuple[StatusChange, ...] = ()
    skipped: bool = False
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return not self.skipped and self.error is None


class TaskPoller:
    def __init__(
            self,
            fetcher: TaskFetcher,
            store: SnapshotStore,
            sink: NotifySink | None = None,
            *,
            interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ) -> None:
        self._fetcher = fetcher
        self._store = store
        self._sink: NotifySink = sink or LoggingNotifySink()
        self._interval = max(MIN_INTERVAL_SECONDS, float(interval_seconds))

        self._state = PollerState.UNINITIALIZED
        self._cycle_running = False
        self._runner: asyncio.Task[None] | None = None
        self._cycle_task: asyncio.Task[CycleResult] | None = None

        self.failed_cycles = 0
        self.skipped_ticks = 0

    @property
    def state(self) -> PollerState:
        return self._state

    @property
    def store(self) -> SnapshotStore:
        return self._store

    @property
    def interval_seconds(self) -> float:
        return self._interval

    async def initialize(self) -> int:
        """
        Load the initial snapshot: one full fetch, every status stored as-is.

        Errors propagate; the poller stays UNINITIALIZED.
        """
        if self._state != PollerState.UNINITIALIZED:
            return len(self._store)

        tasks = await self._fetcher.fetch_all()
        n = self._store.seed(tasks)
        self._state = PollerState.READY
        logger.info("Snapshot initialized with %d tasks.", n)
        return n

    async def run_cycle(self) -> CycleResult:
        """
        One fetch -> diff -> apply -> notify pass.

        A fetch failure is logged and abandons the cycle with the snapshot untouched.
        A sink failure is logged; the remaining changes are still applied and sent.
        """
        if self._state == PollerState.UNINITIALIZED:
            raise RuntimeError("TaskPoller.initialize() must complete before polling")
        if self._state == PollerState.STOPPED:
            raise RuntimeError("TaskPoller is stopped")

        if self._cycle_running:
            logger.warning("Previous poll cycle still running; skipping")
            return CycleResult(skipped=True)

        self._cycle_running = True
        self._state = PollerState.CYCLE_RUNNING
        try:
            logger.info("Fetching tasks from Notion database...")
            try:
                tasks = await self._fetcher.fetch_all()
            except Exception as exc:
                self.failed_cycles += 1
                logger.exception("Poll cycle failed (%d so far); snapshot left unchanged", self.failed_cycles)
                return CycleResult(error=exc)

            updated = find_updated_tasks(tasks, self._store)
            logger.info("Found %d updated tasks.", len(updated))

            changes: list[StatusChange] = []
            for task in updated:
                change = StatusChange(
                    record_id=task.record_id,
                    title=task.title,
                    previous_status=self._store.get(task.record_id) or NO_STATUS,
                    new_status=task.status,
                )
                self._store.set(task.record_id, task.status)
                changes.append(change)

                try:
                    await self._sink.notify(change)
                except Exception:
                    logger.exception("Notify sink failed record=%s", task.record_id)

            return CycleResult(fetched=len(tasks), changes=tuple(changes))
        finally:
            self._cycle_running = False
            if self._state == PollerState.CYCLE_RUNNING:
                self._state = PollerState.READY

    def start(self) -> asyncio.Task[None]:
        """
        Start polling in the background and return the cancellable handle.

        The handle fails if the initial snapshot can't be loaded.
        A stopped poller can't be started again; build a new one.
        """
        if self._state == PollerState.STOPPED:
            raise RuntimeError("TaskPoller is stopped")
        if self._runner is not None and not self._runner.done():
            return self._runner
        self._runner = asyncio.create_task(self._run(), name="task-poller")
        return self._runner

    async def run_forever(self) -> None:
        await self.start()

    async def stop(self) -> None:
        runner, self._runner = self._runner, None
        # A runner that already finished (e.g. failed initial load) has nothing to cancel.
        if runner is not None and not runner.done():
            runner.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await runner

        cycle, self._cycle_task = self._cycle_task, None
        if cycle is not None and not cycle.done():
            cycle.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await cycle

        self._state = PollerState.STOPPED
        logger.info("Poller stopped.")

    async def _run(self) -> None:
        await self.initialize()

        loop = asyncio.get_running_loop()
        next_tick = loop.time() + self._interval

        try:
            while True:
                await asyncio.sleep(max(0.0, next_tick - loop.time()))

                now = loop.time()
                next_tick += self._interval
                if next_tick <= now:
                    # Event loop fell behind; don't fire a burst of catch-up ticks.
                    next_tick = now + self._interval

                if self._cycle_task is not None and not self._cycle_task.done():
                    self.skipped_ticks += 1
                    logger.warning("Poll cycle overran the %.2fs interval; skipping tick", self._interval)
                    continue

                self._cycle_task = asyncio.create_task(self.run_cycle(), name="task-poller-cycle")
                self._cycle_task.add_done_callback(_log_unexpected_failure)
        finally:
            cycle = self._cycle_task
            if cycle is not None and not cycle.done():
                cycle.cancel()


def _log_unexpected_failure(task: asyncio.Task[CycleResult]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Poll cycle crashed", exc_info=exc)
