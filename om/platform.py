"""Filesystem locations used by om.

Follows the XDG base directory convention: ``$XDG_CONFIG_HOME/om`` when the
variable is set and non-empty, ``~/.config/om`` otherwise.  Paths are
resolved on every call so tests can point ``XDG_CONFIG_HOME`` at a
temporary directory.
"""

from __future__ import annotations

import os
from pathlib import Path


def config_home() -> Path:
    """Return the base config directory (``$XDG_CONFIG_HOME`` or ``~/.config``)."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def om_config_dir() -> Path:
    """Return ``<config home>/om``."""
    return config_home() / "om"


def programs_path() -> Path:
    """Return the path of the JSON program store."""
    return om_config_dir() / "programs.json"


def preferences_path() -> Path:
    """Return the path of the YAML preferences file."""
    return om_config_dir() / "preferences.yaml"
