# src/status_watcher/connectors/notify_sinks.py

"""
Notification sinks: where detected status changes go.

The poller only knows the NotifySink port. The default sink writes one
human-readable log line per change; CallbackNotifySink plugs in custom
processing (sync or async callable).
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ..core.ports import NotifySink
from ..tasks.task_models import StatusChange

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[StatusChange], Awaitable[None] | None]


class LoggingNotifySink(NotifySink):
    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    async def notify(self, change: StatusChange) -> None:
        self._log.info(
            'Task "%s" has been updated to "%s" (was "%s").',
            change.title,
            change.new_status,
            change.previous_status,
        )


@dataclass(slots=True)
class CallbackNotifySink(NotifySink):
    callback: ChangeCallback

    async def notify(self, change: StatusChange) -> None:
        result = self.callback(change)
        if inspect.isawaitable(result):
            await result
