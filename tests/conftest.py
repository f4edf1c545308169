"""Shared pytest fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from swapdesk.services.settings import Settings
from swapdesk.services.workspace import Workspace
from swapdesk.ui.controller import IntegrationContext, SwapenvIntegration
from swapdesk.ui.events import EventBus
from swapdesk.ui.presentation.widgets.status_bar import StatusBar

from tests.helpers import INFO, FakeRunner, ScriptedPicker


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    root = tmp_path / "demo"
    root.mkdir()
    return root


@pytest.fixture
def demo_payload() -> str:
    return json.dumps({"project": "demo", "environment": "dev", "envs": ["dev", "prod"]})


@pytest.fixture
def runner(demo_payload: str) -> FakeRunner:
    return FakeRunner({INFO: demo_payload})


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def picker() -> ScriptedPicker:
    return ScriptedPicker()


@pytest.fixture
def integration(
    project_dir: Path,
    runner: FakeRunner,
    settings: Settings,
    picker: ScriptedPicker,
) -> SwapenvIntegration:
    context = IntegrationContext(
        settings=settings,
        workspace=Workspace([project_dir]),
        event_bus=EventBus(),
        status_bar=StatusBar(),
        runner=runner,
        picker=picker,
    )
    return SwapenvIntegration(context)
