# tests/test_extractors.py

from __future__ import annotations

import pytest

from status_watcher.tasks.extractors import extract_status, extract_title
from status_watcher.tasks.task_models import NO_STATUS, NO_TITLE, ItemPage, SingleItem

from .fakes import select_item, title_item


@pytest.mark.parametrize("value", [None, [], ItemPage(), SingleItem(item={}), "junk", 42, [None]])
def test_defaults_for_missing_or_malformed(value) -> None:
    assert extract_status(value) == NO_STATUS
    assert extract_title(value) == NO_TITLE


def test_status_from_single_item_and_sequence() -> None:
    assert extract_status(SingleItem(item=select_item("Done"))) == "Done"
    assert extract_status(select_item("Done")) == "Done"
    assert extract_status([select_item("Todo"), select_item("Done")]) == "Todo"
    assert extract_status(ItemPage(items=[select_item("Doing")])) == "Doing"


def test_status_without_selected_option() -> None:
    assert extract_status(SingleItem(item=select_item(None))) == NO_STATUS
    assert extract_status(SingleItem(item=select_item(""))) == NO_STATUS


def test_title_reads_first_item_only() -> None:
    value = ItemPage(items=[title_item("Write "), title_item("docs")])
    assert extract_title(value) == "Write "
    assert extract_title(SingleItem(item=title_item("Solo"))) == "Solo"


def test_title_with_wrong_shape() -> None:
    assert extract_title([{"title": "not a dict"}]) == NO_TITLE
    assert extract_title([{"title": {"plain_text": None}}]) == NO_TITLE
