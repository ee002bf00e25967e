"""Module-level constants for om."""

from __future__ import annotations

PROGRAM_NAME = "om"
VERSION = "1.0.0"

# Subcommand names understood by the CLI.  ``delete``/``remove`` and
# ``search``/``find`` and ``list``/``ls`` are aliases of each other.
SUBCOMMANDS: tuple[str, ...] = (
    "add",
    "delete",
    "remove",
    "list",
    "ls",
    "info",
    "search",
    "find",
    "edit",
    "path",
    "desc",
    "export",
    "import",
    "run",
)

# Names that a bare ``om <name>`` would interpret as something else.  They can
# still be stored, but only ``om run <name>`` executes them.
RESERVED_NAMES: frozenset[str] = frozenset(
    (
        *SUBCOMMANDS,
        "help",
        "version",
        "-h",
        "--help",
        "-v",
        "--verbose",
        "--version",
    )
)

DEFAULT_SHELL = "/bin/sh"

# Width of the rules drawn around listings and verbose execution output
RULE_WIDTH = 60
INFO_RULE_WIDTH = 40

JSON_INDENT = 4
BACKUP_SUFFIX = ".backup"
