"""Tests for the quick-pick dialog helpers."""

from __future__ import annotations

import pytest

from swapdesk.ui.presentation.dialogs.quick_pick import PickItem, QuickPickDialog, visible_items

ITEMS = [
    PickItem.heading("to..."),
    PickItem(label="✓ dev", description="(current)"),
    PickItem(label="   prod"),
    PickItem.heading("Load"),
    PickItem(label="Load (merge)"),
    PickItem(label="Load (replace)"),
]


def test_matches_is_case_insensitive_over_label_and_description() -> None:
    item = PickItem(label="✓ dev", description="(current)")

    assert item.matches("")
    assert item.matches("DEV")
    assert item.matches("dev current")
    assert not item.matches("prod")
    assert not PickItem.heading("Load").matches("")


def test_visible_items_keeps_heading_before_matches() -> None:
    assert [item.label for item in visible_items(ITEMS, "replace")] == ["Load", "Load (replace)"]
    assert [item.label for item in visible_items(ITEMS, "prod")] == ["to...", "   prod"]
    assert visible_items(ITEMS, "nothing-matches") == []
    assert visible_items(ITEMS, "") == ITEMS


@pytest.mark.asyncio
async def test_pick_without_qt_is_a_cancellation() -> None:
    dialog = QuickPickDialog(enable_qt=False)

    assert await dialog.pick(ITEMS, placeholder="swapenv") is None
