"""Entry point for the om CLI."""

from __future__ import annotations

import argparse
import sys
import warnings
from dataclasses import dataclass
from typing import Callable, Sequence

from rich.console import Console

from . import render
from .constants import PROGRAM_NAME, SUBCOMMANDS, VERSION
from .errors import CorruptionWarning, ProgramError
from .log import logger, setup_logging
from .manager import Outcome, ProgramManager
from .persistence import ProgramStore
from .platform import programs_path
from .preferences import Preferences, load_preferences
from .prompts import ConsolePrompter
from .shell import build_command_line

_GLOBAL_FLAGS = ("-v", "--verbose")
_WORD_FLAGS = {"help": "--help", "version": "--version"}


@dataclass
class _Context:
    manager: ProgramManager
    console: Console
    err_console: Console
    verbose: bool
    prefs: Preferences

    @property
    def show_commands(self) -> bool:
        return self.verbose or self.prefs.display.show_commands


# ---------------------------------------------------------------------------
# Subcommand handlers: each returns the process exit code
# ---------------------------------------------------------------------------


def _cmd_add(args: argparse.Namespace, ctx: _Context) -> int:
    outcome = ctx.manager.add(args.name, args.cmd, args.desc, force=args.force)
    entry = ctx.manager.store.get(args.name)
    render.print_outcome(ctx.console, outcome, args.name, verbose=ctx.verbose, entry=entry)
    return 0


def _cmd_delete(args: argparse.Namespace, ctx: _Context) -> int:
    outcome = ctx.manager.remove(args.name, force=args.force)
    render.print_outcome(ctx.console, outcome, args.name)
    return 0


def _cmd_list(args: argparse.Namespace, ctx: _Context) -> int:
    render.print_list(ctx.console, ctx.manager.list_programs(), ctx.show_commands)
    return 0


def _cmd_info(args: argparse.Namespace, ctx: _Context) -> int:
    render.print_info(ctx.console, ctx.manager.info(args.name))
    return 0


def _cmd_search(args: argparse.Namespace, ctx: _Context) -> int:
    matches = ctx.manager.search(args.query)
    render.print_search(ctx.console, args.query, matches, ctx.show_commands)
    return 0


def _cmd_edit(args: argparse.Namespace, ctx: _Context) -> int:
    ctx.console.print(f"Editing: {args.name}\n", markup=False)
    ctx.manager.edit(args.name)
    render.print_outcome(ctx.console, Outcome.UPDATED, args.name)
    return 0


def _cmd_path(args: argparse.Namespace, ctx: _Context) -> int:
    ctx.console.print(ctx.manager.get_command(args.name), markup=False)
    return 0


def _cmd_desc(args: argparse.Namespace, ctx: _Context) -> int:
    ctx.console.print(ctx.manager.get_description(args.name), markup=False)
    return 0


def _cmd_export(args: argparse.Namespace, ctx: _Context) -> int:
    count = ctx.manager.export_to(args.file)
    ctx.console.print(f"{render.CHECK} Exported {count} programs to: {args.file}", markup=False)
    return 0


def _cmd_import(args: argparse.Namespace, ctx: _Context) -> int:
    render.print_import(ctx.console, ctx.manager.import_from(args.file, force=args.force))
    return 0


def _cmd_run(args: argparse.Namespace, ctx: _Context) -> int:
    if ctx.verbose:
        command_line = build_command_line(ctx.manager.get_command(args.name), args.args)
        render.print_execution_header(ctx.console, command_line)
    result = ctx.manager.execute(args.name, args.args)
    if ctx.verbose:
        render.print_execution_footer(ctx.console, ctx.err_console, result)
    elif not result.ok:
        ctx.err_console.print(f"Command failed with exit code {result.returncode}", markup=False)
    return 0 if result.ok else 1


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse tree; each subparser stores its handler."""
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description=f"{PROGRAM_NAME} - Program Manager",
        epilog=f"Config: {programs_path()}\nVersion: {VERSION}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--version", action="store_true", help="Show version information")

    # -v is also accepted after the subcommand; SUPPRESS keeps the top-level value
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help="Verbose output"
    )

    sub = parser.add_subparsers(dest="command", metavar="<command>")

    def add(name: str, handler: Callable, help_text: str, aliases: Sequence[str] = ()):
        p = sub.add_parser(name, aliases=list(aliases), help=help_text, parents=[common])
        p.set_defaults(handler=handler)
        return p

    p = add("add", _cmd_add, "Add or update a program")
    p.add_argument("name", help="Program name")
    p.add_argument("cmd", help="Command to execute")
    p.add_argument("desc", help="Description")
    p.add_argument("-f", "--force", action="store_true", help="Skip validation and warnings")

    p = add("delete", _cmd_delete, "Delete a program", aliases=["remove"])
    p.add_argument("name", help="Program name")
    p.add_argument("-f", "--force", action="store_true", help="Skip confirmation")

    add("list", _cmd_list, "List all stored programs", aliases=["ls"])

    p = add("info", _cmd_info, "Show detailed program information")
    p.add_argument("name", help="Program name")

    p = add("search", _cmd_search, "Search programs (case-insensitive)", aliases=["find"])
    p.add_argument("query", help="Search query")

    p = add("edit", _cmd_edit, "Edit a program interactively")
    p.add_argument("name", help="Program name")

    p = add("path", _cmd_path, "Show program command")
    p.add_argument("name", help="Program name")

    p = add("desc", _cmd_desc, "Show program description")
    p.add_argument("name", help="Program name")

    p = add("export", _cmd_export, "Export programs to JSON file")
    p.add_argument("file", help="Output filename")

    p = add("import", _cmd_import, "Import programs from JSON file")
    p.add_argument("file", help="Input filename")
    p.add_argument("-f", "--force", action="store_true", help="Skip confirmation")

    p = add("run", _cmd_run, "Execute a stored program")
    p.add_argument("name", help="Program name")
    p.add_argument("args", nargs=argparse.REMAINDER, help="Arguments to pass to the program")

    return parser


def normalize_argv(argv: Sequence[str]) -> list[str]:
    """Rewrite ``om <name> [args...]`` to ``om run <name> [args...]``.

    Leading ``-v``/``--verbose`` flags are skipped when looking for the first
    word.  Anything starting with ``-`` or naming a subcommand is left alone;
    the bare words ``help`` and ``version`` become their flags.
    """
    argv = list(argv)
    idx = 0
    while idx < len(argv) and argv[idx] in _GLOBAL_FLAGS:
        idx += 1
    if idx < len(argv):
        word = argv[idx]
        if word in _WORD_FLAGS:
            argv[idx] = _WORD_FLAGS[word]
        elif not word.startswith("-") and word not in SUBCOMMANDS:
            argv.insert(idx, "run")
    return argv


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def run_tail(argv: Sequence[str]) -> list[str]:
    """Return the arguments after the program name of a ``run`` command line.

    *argv* is already normalized, so its first non-flag word is ``run``.
    argparse drops a leading ``--`` from REMAINDER arguments; this slices the
    raw list instead so every word after the name is forwarded verbatim.
    """
    idx = 0
    while idx < len(argv) and argv[idx] in _GLOBAL_FLAGS:
        idx += 1
    idx += 1  # "run"
    while idx < len(argv) and argv[idx] in _GLOBAL_FLAGS:
        idx += 1
    if idx < len(argv) and argv[idx] == "--":
        idx += 1
    return list(argv[idx + 1 :])


def _load_store() -> ProgramStore:
    """Load the program store, logging any recovery warnings it issues."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", CorruptionWarning)
        store = ProgramStore(programs_path()).load()
    for warning in caught:
        logger.warning("%s", warning.message)
    return store


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse *argv*, run one operation, and return the exit code."""
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    argv = normalize_argv(argv)
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        # --help and usage errors
        return int(exc.code or 0)
    if getattr(args, "handler", None) is _cmd_run:
        args.args = run_tail(argv)

    prefs = load_preferences()
    verbose = bool(args.verbose or prefs.display.verbose)
    setup_logging(verbose)

    console = Console(highlight=False, soft_wrap=True)
    err_console = Console(stderr=True, highlight=False, soft_wrap=True)

    try:
        store = _load_store()
        manager = ProgramManager(
            store,
            ConsolePrompter(console),
            shell=prefs.execution.resolved_shell,
        )
        if args.version:
            render.print_version(console, manager.version_info())
            return 0
        handler = getattr(args, "handler", None)
        if handler is None:
            parser.print_help()
            return 0
        ctx = _Context(
            manager=manager,
            console=console,
            err_console=err_console,
            verbose=verbose,
            prefs=prefs,
        )
        return handler(args, ctx)
    except ProgramError as exc:
        logger.debug("operation failed", exc_info=True)
        err_console.print(f"Error: {exc}", markup=False)
        return 1
    except KeyboardInterrupt:
        err_console.print("Interrupted.", markup=False)
        return 130


def main() -> None:
    """Run om."""
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
