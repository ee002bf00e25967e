"""Shared test fixtures for the om test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from om.manager import ProgramManager
from om.persistence import ProgramStore
from om.prompts import ScriptedPrompter


class RecordingRunner:
    """Stand-in for ``run_shell`` that remembers command lines."""

    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.calls: list[str] = []

    def __call__(self, command_line: str) -> int:
        self.calls.append(command_line)
        return self.returncode


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory."""
    home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "om" / "programs.json"


@pytest.fixture
def store(store_path: Path) -> ProgramStore:
    return ProgramStore(store_path).load()


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def make_manager(store: ProgramStore, runner: RecordingRunner):
    """Factory for a ProgramManager over the ``store`` fixture.

    Every executable is found unless *lookup* says otherwise, and commands
    are recorded instead of run.
    """

    def _make(prompter=None, lookup=lambda _exe: True, **kwargs) -> ProgramManager:
        kwargs.setdefault("runner", runner)
        return ProgramManager(
            store,
            prompter if prompter is not None else ScriptedPrompter(),
            lookup=lookup,
            **kwargs,
        )

    return _make


@pytest.fixture
def manager(make_manager) -> ProgramManager:
    return make_manager()
