# src/status_watcher/tasks/extractors.py

"""
Normalize materialized property values into plain strings.

Both extractors are total: an absent value, an empty page or a payload of an
unexpected shape yields the default label instead of an error.
"""

from __future__ import annotations

from typing import Any

from ..errors import MalformedPropertyError
from .task_models import NO_STATUS, NO_TITLE, ItemPage, SingleItem


def _first_item(value: Any) -> dict[str, Any]:
    if isinstance(value, SingleItem):
        value = value.item
    elif isinstance(value, ItemPage):
        value = value.items

    if isinstance(value, (list, tuple)):
        if not value:
            raise MalformedPropertyError("empty property value")
        value = value[0]

    if not isinstance(value, dict):
        raise MalformedPropertyError(f"unexpected property value: {type(value).__name__}")
    return value


def _nested_text(value: Any, outer: str, inner: str) -> str | None:
    try:
        item = _first_item(value)
    except MalformedPropertyError:
        return None

    nested = item.get(outer)
    if not isinstance(nested, dict):
        return None
    text = nested.get(inner)
    if not isinstance(text, str) or not text:
        return None
    return text


def extract_status(value: Any) -> str:
    """Selected option name of the (first) item, or "No Status"."""
    return _nested_text(value, "select", "name") or NO_STATUS


def extract_title(value: Any) -> str:
    """Plain text of the (first) title item, or "No Title"."""
    return _nested_text(value, "title", "plain_text") or NO_TITLE
