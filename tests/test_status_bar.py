"""Unit tests for the status bar environment indicator."""

from __future__ import annotations

from swapdesk.ui.presentation.widgets.status_bar import INDICATOR_GLYPH, EnvironmentIndicator, StatusBar


def test_indicator_hidden_until_environment_set() -> None:
    bar = StatusBar()

    assert bar.environment_state == ("", False)

    bar.set_environment("dev")

    assert bar.environment_state == ("dev", True)
    assert bar.indicator.display_text == f"{INDICATOR_GLYPH} dev"


def test_indicator_hides_for_none() -> None:
    bar = StatusBar()
    bar.set_environment("no env")

    bar.set_environment(None)

    assert bar.indicator.visible is False


def test_indicator_click_runs_callback() -> None:
    indicator = EnvironmentIndicator()
    indicator.install(None)
    clicks: list[str] = []

    indicator._handle_clicked()
    indicator.set_callback(lambda: clicks.append("menu"))
    indicator._handle_clicked()

    assert clicks == ["menu"]


def test_status_bar_messages_tracked_without_qt() -> None:
    bar = StatusBar()

    bar.set_message("Switched to prod", timeout_ms=5000)
    assert bar.message == "Switched to prod"

    bar.clear_message()
    assert bar.message == ""
