"""Tests for main module."""

import asyncio

import pytest

from caltrack import main as main_module
from caltrack.containers import AppContainer
from tests.conftest import InMemoryFoodRepository


def test_start_fails_when_store_unreachable(
    container: AppContainer, food_repository: InMemoryFoodRepository, capsys
) -> None:
    food_repository.unavailable = True

    status = asyncio.run(main_module.start(container))

    assert status == 1
    assert container.closed == [True]  # type: ignore[attr-defined]
    assert "Could not connect to the database" in capsys.readouterr().out


def test_start_runs_session_and_closes(
    container: AppContainer, monkeypatch: pytest.MonkeyPatch, capsys
) -> None:
    sessions: list[AppContainer] = []

    async def fake_session(app_container: AppContainer) -> None:
        sessions.append(app_container)

    monkeypatch.setattr(main_module, "run_session", fake_session)

    status = asyncio.run(main_module.start(container))

    assert status == 0
    assert sessions == [container]
    assert container.closed == [True]  # type: ignore[attr-defined]
    assert "0 food items loaded" in capsys.readouterr().out


def test_main_exits_with_status(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_run() -> int:
        return 0

    monkeypatch.setattr(main_module, "run", fake_run)

    with pytest.raises(SystemExit) as exc_info:
        main_module.main()

    assert exc_info.value.code == 0
