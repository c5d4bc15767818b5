# src/status_watcher/tasks/task_fetcher.py

from __future__ import annotations

import logging
from typing import Any

from ..core.ports import RecordSource
from .extractors import extract_status, extract_title
from .property_resolver import resolve_property
from .task_models import PropertyValue, Task

logger = logging.getLogger(__name__)


class TaskFetcher:
    """
    Reads every record of one database and turns it into Task snapshots.

    Records are processed one after another; for each record the status property
    is resolved first, then the title. A failure on any record aborts the whole
    fetch, so callers never see a partial task list.
    """

    def __init__(
        self,
        source: RecordSource,
        database_id: str,
        *,
        status_property: str = "Date",
        title_property: str = "Name",
    ) -> None:
        self._source = source
        self._database_id = database_id
        self._status_property = status_property
        self._title_property = title_property

    async def fetch_records(self) -> list[dict[str, Any]]:
        records: list[dict[str, Any]] = []
        cursor: str | None = None
        pages = 0

        while True:
            page = await self._source.query_collection(self._database_id, cursor)
            records.extend(page.records)
            pages += 1
            if not page.next_cursor:
                break
            cursor = page.next_cursor

        logger.info("%d records fetched from database %s (%d pages).", len(records), self._database_id, pages)
        return records

    async def fetch_all(self) -> list[Task]:
        records = await self.fetch_records()

        tasks: list[Task] = []
        for record in records:
            record_id = str(record.get("id") or "")
            if not record_id:
                logger.warning("Skipping record without id: %r", record)
                continue

            status_value = await self._resolve(record, self._status_property)
            title_value = await self._resolve(record, self._title_property)

            tasks.append(
                Task(
                    record_id=record_id,
                    status=extract_status(status_value),
                    title=extract_title(title_value),
                )
            )

        return tasks

    async def _resolve(self, record: dict[str, Any], property_name: str) -> PropertyValue | None:
        properties = record.get("properties") or {}
        prop = properties.get(property_name) if isinstance(properties, dict) else None
        property_id = prop.get("id") if isinstance(prop, dict) else None
        if not property_id:
            # Not in this database's schema: the extractor default applies.
            logger.debug("Record %s has no %r property", record.get("id"), property_name)
            return None

        return await resolve_property(self._source, str(record["id"]), str(property_id))
