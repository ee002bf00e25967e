"""Tests for om.shell -- quoting, lookup, and subprocess execution."""

from __future__ import annotations

import pytest

from om.shell import (
    base_executable,
    build_command_line,
    command_exists,
    escape_shell_arg,
    executable_exists,
    run_shell,
)


class TestEscapeShellArg:
    def test_plain_word(self):
        assert escape_shell_arg("clean") == "'clean'"

    def test_single_quote(self):
        assert escape_shell_arg("it's") == "'it'\\''s'"

    def test_empty(self):
        assert escape_shell_arg("") == "''"

    @pytest.mark.parametrize("arg", ["$HOME", "a b", "*.py", "`id`", "; echo pwned", "x\ny"])
    def test_shell_metacharacters_survive(self, arg, capfd):
        assert run_shell(f"printf '%s' {escape_shell_arg(arg)}") == 0
        assert capfd.readouterr().out == arg


class TestBuildCommandLine:
    def test_no_args(self):
        assert build_command_line("make -j4") == "make -j4"

    def test_appends_escaped_args(self):
        assert build_command_line("make -j4", ["clean"]) == "make -j4 'clean'"

    def test_multiple_args(self):
        line = build_command_line("git commit", ["-m", "it's done"])
        assert line == "git commit '-m' 'it'\\''s done'"


class TestBaseExecutable:
    def test_first_word(self):
        assert base_executable("make -j4 all") == "make"

    def test_single_word(self):
        assert base_executable("htop") == "htop"

    def test_path(self):
        assert base_executable("/usr/local/bin/tool --flag") == "/usr/local/bin/tool"


class TestLookup:
    def test_command_on_path(self):
        assert command_exists("sh") is True

    def test_shell_builtin(self):
        assert command_exists("cd") is True

    def test_unknown_command(self):
        assert command_exists("om-definitely-not-a-command-4711") is False

    def test_empty_name(self):
        assert command_exists("") is False

    def test_existing_path(self, tmp_path):
        tool = tmp_path / "tool"
        tool.write_text("#!/bin/sh\n")
        assert executable_exists(str(tool)) is True

    def test_missing_path(self, tmp_path):
        assert executable_exists(str(tmp_path / "missing")) is False


class TestRunShell:
    def test_success(self):
        assert run_shell("true") == 0

    def test_exit_status(self):
        assert run_shell("exit 3") == 3

    def test_shell_features(self, tmp_path):
        out = tmp_path / "out.txt"
        assert run_shell(f"echo hello | tr a-z A-Z > {escape_shell_arg(str(out))}") == 0
        assert out.read_text() == "HELLO\n"

    def test_killed_by_signal(self):
        assert run_shell("kill -TERM $$") == 128 + 15
