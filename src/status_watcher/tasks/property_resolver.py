# src/status_watcher/tasks/property_resolver.py

from __future__ import annotations

import logging

from ..core.ports import RecordSource
from .task_models import ItemPage, PropertyValue, SingleItem

logger = logging.getLogger(__name__)


async def resolve_property(source: RecordSource, record_id: str, property_id: str) -> PropertyValue:
    """
    Return the fully materialized value of one property.

    A non-paginated property comes back as a SingleItem and is returned unchanged.
    A paginated one is followed cursor by cursor until the server stops handing out
    cursors (or answers with something that is not a page), and the items of every
    page are returned as a single ItemPage with next_cursor=None.

    Errors from the source propagate: one failed page fails the whole property.
    """
    first = await source.retrieve_property(record_id, property_id)
    if isinstance(first, SingleItem):
        return first

    items = list(first.items)
    cursor = first.next_cursor
    pages = 1

    while cursor:
        page = await source.retrieve_property(record_id, property_id, cursor)
        if not isinstance(page, ItemPage):
            # Terminal marker: the continuation has ended.
            break
        items.extend(page.items)
        cursor = page.next_cursor
        pages += 1

    logger.debug(
        "Resolved property record=%s property=%s pages=%d items=%d",
        record_id,
        property_id,
        pages,
        len(items),
    )
    return ItemPage(items=items, next_cursor=None)
