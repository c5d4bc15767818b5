# src/status_watcher/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The change-detection engine depends on Protocols instead of the Notion client.
This keeps the remote store and the notification side swappable and makes testing easier.
"""

from typing import Awaitable, Protocol

from ..tasks.task_models import PropertyValue, RecordPage, StatusChange


class RecordSource(Protocol):
    """
    Remote collection of records (a Notion database).

    Implementations raise TransientAPIError on network/API failure.
    """

    def query_collection(
            self,
            collection_id: str,
            cursor: str | None = None,
    ) -> Awaitable[RecordPage]: ...

    def retrieve_property(
            self,
            record_id: str,
            property_id: str,
            cursor: str | None = None,
    ) -> Awaitable[PropertyValue]: ...


class NotifySink(Protocol):
    """Receives one StatusChange per detected status update."""

    def notify(self, change: StatusChange) -> Awaitable[None]: ...
