"""User preferences for om.

Loads settings from ``<config dir>/om/preferences.yaml``.
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .constants import DEFAULT_SHELL
from .log import logger
from .platform import preferences_path

_DEFAULT_YAML = """\
# om preferences
# Delete this file to reset to defaults.

display:
  verbose: false          # same as passing -v to every command
  show_commands: false    # show each command under its name in list/search

execution:
  shell: ""               # shell used to run programs (empty = /bin/sh)
"""


@dataclass
class DisplayPreferences:
    """What listings and command output show."""

    verbose: bool = False
    show_commands: bool = False


@dataclass
class ExecutionPreferences:
    """How stored programs are run."""

    shell: str = ""  # Empty means DEFAULT_SHELL

    @property
    def resolved_shell(self) -> str:
        return self.shell or DEFAULT_SHELL


@dataclass
class Preferences:
    """Top-level om preferences."""

    display: DisplayPreferences = field(default_factory=DisplayPreferences)
    execution: ExecutionPreferences = field(default_factory=ExecutionPreferences)


def load_preferences(path: Path | None = None) -> Preferences:
    """Load preferences from YAML file.

    Falls back to sensible defaults if the file doesn't exist or is invalid.
    Creates a default preferences file on first run.
    """
    path = path or preferences_path()
    prefs = Preferences()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError):
            logger.debug("failed to read preferences from %s", path, exc_info=True)
            return prefs
        if not isinstance(data, dict):
            return prefs
        if isinstance(data.get("display"), dict):
            ddata = data["display"]
            # Only real YAML booleans; "false" in quotes is not one
            if isinstance(ddata.get("verbose"), bool):
                prefs.display.verbose = ddata["verbose"]
            if isinstance(ddata.get("show_commands"), bool):
                prefs.display.show_commands = ddata["show_commands"]
        if isinstance(data.get("execution"), dict):
            edata = data["execution"]
            shell = edata.get("shell")
            if shell is None or isinstance(shell, str):
                prefs.execution.shell = shell or ""
    else:
        # Create default file for user to customize
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML, encoding="utf-8")
        except OSError:
            logger.debug("could not create %s", path, exc_info=True)

    return prefs
