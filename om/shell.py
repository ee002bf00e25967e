"""Shell helpers: argument quoting, command lookup, and execution.

Stored commands are handed to a shell as-is so pipes, globs and variable
expansion keep working.  Only arguments appended at run time are quoted.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Sequence

from .constants import DEFAULT_SHELL
from .log import logger


def escape_shell_arg(arg: str) -> str:
    """Return *arg* as a single-quoted POSIX shell token.

    Embedded single quotes become ``'\\''`` (close, escaped quote, reopen).
    """
    return "'" + arg.replace("'", "'\\''") + "'"


def build_command_line(command: str, extra_args: Sequence[str] = ()) -> str:
    """Append each of *extra_args*, escaped, to the stored *command*."""
    parts = [command]
    parts.extend(escape_shell_arg(arg) for arg in extra_args)
    return " ".join(parts)


def base_executable(command: str) -> str:
    """Return the part of *command* before its first space."""
    return command.split(" ", 1)[0]


def is_path(executable: str) -> bool:
    return "/" in executable


def command_exists(name: str, shell: str = DEFAULT_SHELL) -> bool:
    """True if *name* resolves on ``PATH`` or via the shell's ``command -v``.

    The shell lookup also finds builtins, functions and aliases that a PATH
    search alone misses.
    """
    if not name:
        return False
    if shutil.which(name):
        return True
    try:
        result = subprocess.run(
            [shell, "-c", f"command -v {escape_shell_arg(name)}"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        logger.debug("command -v lookup failed for %s", name, exc_info=True)
        return False
    return result.returncode == 0


def executable_exists(executable: str, shell: str = DEFAULT_SHELL) -> bool:
    """Check a base executable: on disk if it is a path, else via lookup."""
    if is_path(executable):
        return Path(executable).exists()
    return command_exists(executable, shell=shell)


def run_shell(command_line: str, shell: str = DEFAULT_SHELL) -> int:
    """Run *command_line* through *shell* and wait for it.

    Output goes straight to the terminal.  Returns the exit status; a
    process killed by a signal reports ``128 + signum`` like a shell does.
    """
    logger.debug("running %r with %s", command_line, shell)
    completed = subprocess.run(command_line, shell=True, executable=shell, check=False)
    code = completed.returncode
    if code < 0:
        return 128 - code
    return code
