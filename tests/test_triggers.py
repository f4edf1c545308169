"""Tests for save/focus refresh triggers and background task spawning."""

from __future__ import annotations

import asyncio
import logging

import pytest

from swapdesk.ui.events import DocumentSaved, EventBus, WindowFocusChanged
from swapdesk.ui.triggers import RefreshTriggers, spawn


class _RefreshCounter:
    def __init__(self) -> None:
        self.count = 0

    async def __call__(self) -> None:
        self.count += 1


def _install(auto_refresh: bool = True) -> tuple[EventBus, _RefreshCounter, RefreshTriggers, dict[str, bool]]:
    bus: EventBus = EventBus()
    counter = _RefreshCounter()
    flags = {"auto_refresh": auto_refresh}
    triggers = RefreshTriggers(event_bus=bus, refresh=counter, auto_refresh=lambda: flags["auto_refresh"])
    triggers.install()
    return bus, counter, triggers, flags


async def _drain(triggers: RefreshTriggers) -> None:
    pending = triggers.pending
    if pending:
        await asyncio.gather(*pending)


@pytest.mark.asyncio
async def test_save_refreshes_when_auto_refresh_enabled() -> None:
    bus, counter, triggers, _flags = _install(auto_refresh=True)

    bus.publish(DocumentSaved(path="/work/demo/.env"))
    await _drain(triggers)

    assert counter.count == 1


@pytest.mark.asyncio
async def test_save_ignored_when_auto_refresh_disabled() -> None:
    bus, counter, triggers, flags = _install(auto_refresh=False)

    bus.publish(DocumentSaved(path="/work/demo/.env"))
    await _drain(triggers)
    assert counter.count == 0

    flags["auto_refresh"] = True
    bus.publish(DocumentSaved(path="/work/demo/.env"))
    await _drain(triggers)
    assert counter.count == 1


@pytest.mark.asyncio
async def test_focus_gain_refreshes_regardless_of_auto_refresh() -> None:
    bus, counter, triggers, _flags = _install(auto_refresh=False)

    bus.publish(WindowFocusChanged(focused=False))
    await _drain(triggers)
    assert counter.count == 0

    bus.publish(WindowFocusChanged(focused=True))
    await _drain(triggers)
    assert counter.count == 1


@pytest.mark.asyncio
async def test_rapid_events_each_schedule_a_refresh() -> None:
    bus, counter, triggers, _flags = _install()

    bus.publish(DocumentSaved(path="a"))
    bus.publish(WindowFocusChanged(focused=True))
    assert len(triggers.pending) == 2
    await _drain(triggers)

    assert counter.count == 2


@pytest.mark.asyncio
async def test_uninstall_stops_forwarding() -> None:
    bus, counter, triggers, _flags = _install()
    triggers.uninstall()

    bus.publish(WindowFocusChanged(focused=True))
    await _drain(triggers)

    assert counter.count == 0


def test_events_without_running_loop_are_dropped() -> None:
    bus, counter, triggers, _flags = _install()

    bus.publish(WindowFocusChanged(focused=True))

    assert triggers.pending == ()
    assert counter.count == 0


@pytest.mark.asyncio
async def test_spawn_logs_task_failures(caplog: pytest.LogCaptureFixture) -> None:
    async def _boom() -> None:
        raise RuntimeError("refresh failed")

    tasks: set[asyncio.Task[None]] = set()
    with caplog.at_level(logging.ERROR, logger="swapdesk.ui.triggers"):
        task = spawn(_boom(), tasks=tasks)
        assert task is not None
        await asyncio.gather(task, return_exceptions=True)
        await asyncio.sleep(0)

    assert tasks == set()
    assert "Background task failed" in caplog.text
