# tests/test_property_resolver.py

from __future__ import annotations

import pytest

from status_watcher.errors import TransientAPIError
from status_watcher.tasks.property_resolver import resolve_property
from status_watcher.tasks.task_models import ItemPage, SingleItem

from .fakes import FakeRecordSource, select_item, title_item


@pytest.mark.asyncio
async def test_single_item_is_returned_unwrapped(source: FakeRecordSource) -> None:
    source.properties[("r1", "st")] = select_item("Todo")

    value = await resolve_property(source, "r1", "st")

    assert isinstance(value, SingleItem)
    assert value.item["select"]["name"] == "Todo"
    assert source.property_calls == [("r1", "st", None)]


@pytest.mark.asyncio
async def test_all_pages_are_consumed_in_order(source: FakeRecordSource) -> None:
    pages = [
        [title_item("a"), title_item("b")],
        [title_item("c")],
        [title_item("d"), title_item("e"), title_item("f")],
    ]
    source.properties[("r1", "title")] = pages

    value = await resolve_property(source, "r1", "title")

    assert isinstance(value, ItemPage)
    assert value.next_cursor is None
    assert len(value.items) == sum(len(p) for p in pages)
    assert [i["title"]["plain_text"] for i in value.items] == ["a", "b", "c", "d", "e", "f"]
    assert [c for (_, _, c) in source.property_calls] == [None, "cur:1", "cur:2"]


@pytest.mark.asyncio
async def test_terminal_item_ends_continuation() -> None:
    class _Source(FakeRecordSource):
        async def retrieve_property(self, record_id, property_id, cursor=None):
            self.property_calls.append((record_id, property_id, cursor))
            if cursor is None:
                return ItemPage(items=[title_item("only")], next_cursor="more")
            return SingleItem(item={"object": "property_item"})

    src = _Source()
    value = await resolve_property(src, "r1", "title")

    assert isinstance(value, ItemPage)
    assert [i["title"]["plain_text"] for i in value.items] == ["only"]
    assert len(src.property_calls) == 2


@pytest.mark.asyncio
async def test_empty_paginated_value(source: FakeRecordSource) -> None:
    source.properties[("r1", "title")] = [[]]

    value = await resolve_property(source, "r1", "title")

    assert value == ItemPage(items=[], next_cursor=None)


@pytest.mark.asyncio
async def test_page_failure_propagates() -> None:
    class _Source(FakeRecordSource):
        async def retrieve_property(self, record_id, property_id, cursor=None):
            if cursor is None:
                return ItemPage(items=[title_item("a")], next_cursor="cur:1")
            raise TransientAPIError("boom")

    with pytest.raises(TransientAPIError):
        await resolve_property(_Source(), "r1", "title")
