# src/status_watcher/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeAlias

NO_STATUS = "No Status"
NO_TITLE = "No Title"


@dataclass(slots=True, frozen=True)
class Task:
    """One record of the watched database, reduced to what the poller compares."""

    record_id: str
    status: str
    title: str


@dataclass(slots=True, frozen=True)
class StatusChange:
    record_id: str
    title: str
    previous_status: str
    new_status: str


@dataclass(slots=True, frozen=True)
class SingleItem:
    """A property value returned inline (not paginated)."""

    item: dict[str, Any]


@dataclass(slots=True, frozen=True)
class ItemPage:
    """
    One page of a paginated property value.

    Once resolved, next_cursor is None and items holds every page in order.
    """

    items: list[dict[str, Any]] = field(default_factory=list)
    next_cursor: str | None = None


PropertyValue: TypeAlias = SingleItem | ItemPage


@dataclass(slots=True, frozen=True)
class RecordPage:
    records: list[dict[str, Any]] = field(default_factory=list)
    next_cursor: str | None = None


def property_value_from_response(data: Any) -> PropertyValue:
    """
    Classify a raw property-retrieve response.

    - object == "property_item" -> SingleItem
    - object == "list"          -> ItemPage (one page, cursor kept)
    - anything else             -> SingleItem wrapping the raw payload;
      extractors fall back to defaults for shapes they can't read.
    """
    if not isinstance(data, dict):
        return SingleItem(item={})

    kind = data.get("object")
    if kind == "list":
        results = data.get("results")
        items = [r for r in results if isinstance(r, dict)] if isinstance(results, list) else []
        cursor = data.get("next_cursor") or None
        return ItemPage(items=items, next_cursor=cursor)

    return SingleItem(item=data)
