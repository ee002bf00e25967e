"""Program store operations.

``ProgramManager`` wraps one loaded ``ProgramStore`` and implements every
user-facing operation.  It raises ``ProgramError`` subclasses for failures,
returns plain result objects for everything else, and never prints: the
CLI renders results.  Warnings go through the package logger.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Sequence

from .constants import DEFAULT_SHELL, PROGRAM_NAME, RESERVED_NAMES, VERSION
from .errors import NotFoundError, ProgramIOError, ValidationError
from .log import logger
from .persistence import Entry, ProgramStore, parse_import
from .persistence._base import dump_json
from .prompts import Prompter
from .shell import base_executable, build_command_line, executable_exists, is_path, run_shell


class Outcome(Enum):
    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ProgramInfo:
    name: str
    command: str | None
    description: str | None
    reserved: bool


@dataclass(frozen=True)
class ImportResult:
    added: int = 0
    updated: int = 0
    cancelled: bool = False


@dataclass(frozen=True)
class ExecutionResult:
    command_line: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class VersionInfo:
    program: str
    version: str
    config_path: Path
    count: int


def is_reserved_name(name: str) -> bool:
    """True if a bare ``om <name>`` would be taken as a subcommand or flag."""
    return name in RESERVED_NAMES


class ProgramManager:
    """All operations on one program store.

    *runner* executes a finished command line and returns its exit status;
    *lookup* decides whether a base executable exists.  Both default to the
    real shell helpers and are replaceable for tests.
    """

    def __init__(
        self,
        store: ProgramStore,
        prompter: Prompter,
        *,
        shell: str = DEFAULT_SHELL,
        runner: Callable[[str], int] | None = None,
        lookup: Callable[[str], bool] | None = None,
    ) -> None:
        self.store = store
        self.prompter = prompter
        self.shell = shell
        self.runner = runner or functools.partial(run_shell, shell=shell)
        self.lookup = lookup or functools.partial(executable_exists, shell=shell)

    # -- lookups --------------------------------------------------------------

    def _require(self, name: str) -> Entry:
        entry = self.store.get(name)
        if entry is None:
            raise NotFoundError(f"Program '{name}' not found")
        return entry

    def list_programs(self) -> list[tuple[str, Entry]]:
        return self.store.items()

    def info(self, name: str) -> ProgramInfo:
        entry = self._require(name)
        return ProgramInfo(
            name=name,
            command=entry.command,
            description=entry.description,
            reserved=is_reserved_name(name),
        )

    def search(self, query: str) -> list[tuple[str, Entry]]:
        """Case-insensitive substring match on name, description and command."""
        needle = query.lower()
        matches = []
        for name, entry in self.store.items():
            haystacks = (name, entry.description or "", entry.command or "")
            if any(needle in text.lower() for text in haystacks):
                matches.append((name, entry))
        return matches

    def get_command(self, name: str) -> str:
        entry = self.store.get(name)
        if entry is None or entry.command is None:
            raise NotFoundError(f"Program '{name}' not found")
        return entry.command

    def get_description(self, name: str) -> str:
        entry = self.store.get(name)
        if entry is None or entry.description is None:
            raise NotFoundError(f"No description for '{name}'")
        return entry.description

    def version_info(self) -> VersionInfo:
        return VersionInfo(
            program=PROGRAM_NAME,
            version=VERSION,
            config_path=self.store.path,
            count=len(self.store),
        )

    # -- mutations ------------------------------------------------------------

    def add(self, name: str, command: str, description: str = "", force: bool = False) -> Outcome:
        """Insert or replace *name*.

        Without *force*, a reserved name or a base executable that cannot be
        found asks for confirmation; declining leaves the store untouched.
        """
        if not name or not command:
            raise ValidationError("Name and command cannot be empty")

        if is_reserved_name(name):
            logger.warning("'%s' is a reserved command name", name)
            logger.warning("You will need to use '%s run %s' to execute it", PROGRAM_NAME, name)
            if not force and not self.prompter.confirm("Continue anyway?"):
                return Outcome.CANCELLED

        if not force:
            executable = base_executable(command)
            if not self.lookup(executable):
                if is_path(executable):
                    logger.warning("File '%s' does not exist", executable)
                else:
                    logger.warning("'%s' not found in PATH", executable)
                if not self.prompter.confirm("Add anyway?"):
                    return Outcome.CANCELLED

        existed = self.store.put(name, Entry(command=command, description=description))
        self.store.save()
        return Outcome.UPDATED if existed else Outcome.ADDED

    def remove(self, name: str, force: bool = False) -> Outcome:
        entry = self._require(name)
        if not force:
            prompt = f"Delete '{name}' ({entry.command or ''})? Are you sure?"
            if not self.prompter.confirm(prompt):
                return Outcome.CANCELLED
        self.store.delete(name)
        self.store.save()
        return Outcome.DELETED

    def edit(self, name: str) -> Entry:
        """Ask for a new command and description; Enter keeps the current one.

        Both answers are collected before anything is written.
        """
        entry = self._require(name)
        command = entry.command or ""
        description = entry.description or ""

        new_command = self.prompter.ask(
            f"Current command: {command}\nNew command (Enter to keep current)"
        )
        if new_command:
            command = new_command

        new_description = self.prompter.ask(
            f"Current description: {description}\nNew description (Enter to keep current)"
        )
        if new_description:
            description = new_description

        updated = Entry(command=command, description=description)
        self.store.put(name, updated)
        self.store.save()
        return updated

    # -- execution ------------------------------------------------------------

    def execute(self, name: str, extra_args: Sequence[str] = ()) -> ExecutionResult:
        """Run the stored command with *extra_args* appended, shell-escaped.

        Blocks until the command finishes.  A non-zero exit status is part
        of the result, not an error.
        """
        entry = self.store.get(name)
        if entry is None or entry.command is None:
            raise NotFoundError(
                f"Program '{name}' not found.\n"
                f"Run '{PROGRAM_NAME} list' to see available programs."
            )
        command_line = build_command_line(entry.command, extra_args)
        logger.debug("executing: %s", command_line)
        try:
            returncode = self.runner(command_line)
        except OSError as exc:
            raise ProgramIOError(f"Cannot run '{command_line}': {exc}") from exc
        return ExecutionResult(command_line=command_line, returncode=returncode)

    # -- export / import ------------------------------------------------------

    def export_to(self, path: str | Path) -> int:
        """Write the whole store to *path*; return the number of programs."""
        target = Path(path)
        try:
            target.write_text(dump_json(self.store.to_json()), encoding="utf-8")
        except OSError as exc:
            raise ProgramIOError(f"Cannot write to {target}: {exc}") from exc
        return len(self.store)

    def import_from(self, path: str | Path, force: bool = False) -> ImportResult:
        """Merge programs from *path*, overwriting same-named entries."""
        source = Path(path)
        if not source.exists():
            raise ProgramIOError(f"File not found: {source}")
        try:
            text = source.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ValidationError(f"Invalid JSON file: {exc}") from exc
        except OSError as exc:
            raise ProgramIOError(f"Cannot read {source}: {exc}") from exc
        incoming = parse_import(text)

        if not force:
            prompt = (
                f"Import {len(incoming)} programs from '{source}'?\n"
                "Warning: This will overwrite existing programs with the same name.\n"
                "Continue?"
            )
            if not self.prompter.confirm(prompt):
                return ImportResult(cancelled=True)

        added = updated = 0
        for name, entry in incoming.items():
            if self.store.put(name, entry):
                updated += 1
            else:
                added += 1
        self.store.save()
        return ImportResult(added=added, updated=updated)
