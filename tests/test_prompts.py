"""Tests for the prompter implementations."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from om.prompts import ConsolePrompter, ScriptedPrompter


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


class TestConsolePrompter:
    @pytest.mark.parametrize("reply,expected", [("y", True), ("Y", True), ("n", False)])
    def test_confirm(self, console, monkeypatch, reply, expected):
        monkeypatch.setattr("builtins.input", lambda *_args: reply)
        assert ConsolePrompter(console).confirm("Continue?") is expected

    def test_confirm_empty_reply_is_no(self, console, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda *_args: "")
        assert ConsolePrompter(console).confirm("Continue?") is False

    def test_confirm_eof_is_no(self, console, monkeypatch):
        def _eof(*_args):
            raise EOFError

        monkeypatch.setattr("builtins.input", _eof)
        assert ConsolePrompter(console).confirm("Continue?") is False

    def test_ask_returns_text(self, console, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda *_args: "ninja -j8")
        assert ConsolePrompter(console).ask("New command") == "ninja -j8"

    def test_ask_enter_keeps_empty(self, console, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda *_args: "")
        assert ConsolePrompter(console).ask("New command") == ""

    def test_prompt_is_shown(self, console, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda *_args: "y")
        ConsolePrompter(console).confirm("Delete 'x'?")
        assert "Delete 'x'?" in console.file.getvalue()


class TestScriptedPrompter:
    def test_replays_answers_then_default(self):
        prompter = ScriptedPrompter(confirms=[True], answers=["a"], default=False)
        assert prompter.confirm("one") is True
        assert prompter.confirm("two") is False
        assert prompter.ask("three") == "a"
        assert prompter.ask("four") == ""
        assert prompter.asked == ["one", "two", "three", "four"]
