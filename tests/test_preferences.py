"""Tests for om.preferences.

All file I/O uses tmp_path so nothing touches the real user config.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from om.constants import DEFAULT_SHELL
from om.preferences import Preferences, load_preferences


class TestLoadPreferencesDefaults:
    """When no file exists, load_preferences returns sensible defaults."""

    def test_defaults_when_no_file(self, tmp_path: Path):
        prefs = load_preferences(tmp_path / "nonexistent.yaml")
        assert prefs.display.verbose is False
        assert prefs.display.show_commands is False
        assert prefs.execution.shell == ""
        assert prefs.execution.resolved_shell == DEFAULT_SHELL

    def test_creates_default_file(self, tmp_path: Path):
        path = tmp_path / "sub" / "prefs.yaml"
        load_preferences(path)
        assert path.exists()
        data = yaml.safe_load(path.read_text())
        assert data["display"]["verbose"] is False
        assert data["execution"]["shell"] == ""

    def test_default_path_follows_xdg(self, config_home: Path):
        load_preferences()
        assert (config_home / "om" / "preferences.yaml").exists()


class TestLoadPreferencesFromFile:
    def test_reads_values(self, tmp_path: Path):
        path = tmp_path / "prefs.yaml"
        path.write_text(
            "display:\n"
            "  verbose: true\n"
            "  show_commands: true\n"
            "execution:\n"
            "  shell: /bin/bash\n"
        )
        prefs = load_preferences(path)
        assert prefs.display.verbose is True
        assert prefs.display.show_commands is True
        assert prefs.execution.resolved_shell == "/bin/bash"

    def test_partial_file_keeps_other_defaults(self, tmp_path: Path):
        path = tmp_path / "prefs.yaml"
        path.write_text("display:\n  show_commands: true\n")
        prefs = load_preferences(path)
        assert prefs.display.show_commands is True
        assert prefs.display.verbose is False
        assert prefs.execution.shell == ""

    def test_null_shell_means_default(self, tmp_path: Path):
        path = tmp_path / "prefs.yaml"
        path.write_text("execution:\n  shell:\n")
        assert load_preferences(path).execution.resolved_shell == DEFAULT_SHELL

    def test_invalid_yaml_falls_back(self, tmp_path: Path):
        path = tmp_path / "prefs.yaml"
        path.write_text("display: [unclosed\n")
        assert load_preferences(path) == Preferences()

    def test_non_mapping_falls_back(self, tmp_path: Path):
        path = tmp_path / "prefs.yaml"
        path.write_text("- just\n- a list\n")
        assert load_preferences(path) == Preferences()

    def test_existing_file_not_rewritten(self, tmp_path: Path):
        path = tmp_path / "prefs.yaml"
        path.write_text("# mine\n")
        load_preferences(path)
        assert path.read_text() == "# mine\n"

    def test_quoted_booleans_ignored(self, tmp_path: Path):
        path = tmp_path / "prefs.yaml"
        path.write_text('display:\n  verbose: "false"\n  show_commands: "true"\n')
        prefs = load_preferences(path)
        assert prefs.display.verbose is False
        assert prefs.display.show_commands is False

    def test_non_string_shell_ignored(self, tmp_path: Path):
        path = tmp_path / "prefs.yaml"
        path.write_text("execution:\n  shell: 5\n")
        assert load_preferences(path).execution.resolved_shell == DEFAULT_SHELL
