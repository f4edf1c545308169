"""End-to-end tests for the swapenv integration wiring."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from swapdesk.services.settings import Settings
from swapdesk.services.workspace import Workspace
from swapdesk.ui import commands
from swapdesk.ui.controller import IntegrationContext, SwapenvIntegration
from swapdesk.ui.events import DocumentSaved, EventBus, WindowFocusChanged
from swapdesk.ui.presentation.widgets.status_bar import StatusBar

from tests.helpers import INFO, FakeRunner, ScriptedPicker


@pytest.mark.asyncio
async def test_activation_refreshes_and_shows_indicator(integration: SwapenvIntegration, runner: FakeRunner) -> None:
    await integration.activate()

    assert runner.argvs == [INFO]
    assert integration.status_bar.environment_state == ("dev", True)
    assert integration.state_cache.snapshot.known_environments == ("dev", "prod")


@pytest.mark.asyncio
async def test_show_menu_command_switches_environment(
    integration: SwapenvIntegration,
    runner: FakeRunner,
    picker: ScriptedPicker,
) -> None:
    state = {"env": "dev"}

    def _info() -> str:
        return json.dumps({"project": "demo", "environment": state["env"], "envs": ["dev", "prod"]})

    def _switch() -> str:
        state["env"] = "prod"
        return ""

    runner.responses.update({INFO: _info, ("to", "prod"): _switch})
    picker._choices.append("prod")
    await integration.activate()

    await integration.execute_command(commands.SHOW_MENU)

    assert runner.argvs == [INFO, ("to", "prod"), INFO]
    assert integration.status_bar.environment_state == ("prod", True)
    assert integration.notifier.history == [("info", "Switched to prod")]


@pytest.mark.asyncio
async def test_refresh_command_and_unknown_command(integration: SwapenvIntegration, runner: FakeRunner) -> None:
    await integration.execute_command(commands.REFRESH)
    assert runner.argvs == [INFO]

    with pytest.raises(KeyError):
        await integration.execute_command("swapenv.nope")


@pytest.mark.asyncio
async def test_triggers_refresh_after_activation(integration: SwapenvIntegration, runner: FakeRunner) -> None:
    await integration.activate()

    integration.event_bus.publish(DocumentSaved(path="/work/demo/.env"))
    integration.event_bus.publish(WindowFocusChanged(focused=True))
    task = integration.run_command(commands.REFRESH)
    assert task is not None
    await task
    for pending in list(integration._triggers.pending):
        await pending

    assert runner.argvs.count(INFO) == 4


@pytest.mark.asyncio
async def test_indicator_click_opens_menu(integration: SwapenvIntegration, picker: ScriptedPicker) -> None:
    await integration.activate()

    integration.status_bar.indicator._handle_clicked()
    for task in list(integration._tasks):
        await task

    assert picker.seen and picker.seen[0][0] == "swapenv"


@pytest.mark.asyncio
async def test_deactivate_detaches_triggers(integration: SwapenvIntegration, runner: FakeRunner) -> None:
    await integration.activate()
    integration.deactivate()

    integration.event_bus.publish(WindowFocusChanged(focused=True))

    assert integration._triggers.pending == ()
    assert runner.argvs == [INFO]


@pytest.mark.asyncio
async def test_no_project_hides_indicator(tmp_path: Path) -> None:
    runner = FakeRunner({INFO: None})
    integration = SwapenvIntegration(
        IntegrationContext(
            settings=Settings(),
            workspace=Workspace([tmp_path]),
            event_bus=EventBus(),
            status_bar=StatusBar(),
            runner=runner,
            picker=ScriptedPicker(),
        )
    )

    await integration.activate()

    assert integration.status_bar.environment_state == ("", False)
