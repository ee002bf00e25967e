"""Console rendering of ProgramManager results."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from .constants import INFO_RULE_WIDTH, PROGRAM_NAME, RULE_WIDTH
from .manager import ExecutionResult, ImportResult, Outcome, ProgramInfo, VersionInfo
from .persistence import Entry

CHECK = "✓"
CROSS = "✗"
ARROW = "→"


def _entry_lines(name: str, entry: Entry, show_command: bool) -> list[str]:
    line = f"  [bold]{escape(name)}[/bold]"
    if entry.description:
        line += f" - {escape(entry.description)}"
    lines = [line]
    if show_command and entry.command is not None:
        lines.append(f"    [dim]{ARROW} {escape(entry.command)}[/dim]")
    return lines


def print_list(console: Console, entries: list[tuple[str, Entry]], show_commands: bool) -> None:
    if not entries:
        console.print("No programs stored.")
        console.print(f"Use '{PROGRAM_NAME} add <name> <cmd> <desc>' to add one.", markup=False)
        return
    console.print(f"\nStored Programs ({len(entries)}):")
    console.print("=" * RULE_WIDTH)
    for name, entry in entries:
        for line in _entry_lines(name, entry, show_commands):
            console.print(line)
    console.print("=" * RULE_WIDTH)


def print_search(
    console: Console, query: str, matches: list[tuple[str, Entry]], show_commands: bool
) -> None:
    console.print(f"\nSearch results for '{escape(query)}':")
    if not matches:
        console.print("  No matches found.")
        return
    for name, entry in matches:
        for line in _entry_lines(name, entry, show_commands):
            console.print(line)


def print_info(console: Console, info: ProgramInfo) -> None:
    console.print(f"\nProgram: [bold]{escape(info.name)}[/bold]")
    console.print("-" * INFO_RULE_WIDTH)
    if info.command is not None:
        console.print(f"Command:     {escape(info.command)}")
    if info.description is not None:
        console.print(f"Description: {escape(info.description)}")
    if info.reserved:
        console.print("\nNote: This is a reserved command name.")
        console.print(f"Use '{PROGRAM_NAME} run {escape(info.name)}' to execute.")


def print_outcome(
    console: Console,
    outcome: Outcome,
    name: str,
    verbose: bool = False,
    entry: Entry | None = None,
) -> None:
    if outcome is Outcome.CANCELLED:
        console.print("Cancelled.")
        return
    label = {
        Outcome.ADDED: "Added",
        Outcome.UPDATED: "Updated",
        Outcome.DELETED: "Deleted",
    }[outcome]
    console.print(f"[green]{CHECK}[/green] {label}: {escape(name)}")
    if verbose and entry is not None:
        console.print(f"  Command:     {escape(entry.command or '')}")
        console.print(f"  Description: {escape(entry.description or '')}")


def print_import(console: Console, result: ImportResult) -> None:
    if result.cancelled:
        console.print("Cancelled.")
        return
    console.print(
        f"[green]{CHECK}[/green] Imported: {result.added} new, {result.updated} updated"
    )


def print_execution_header(console: Console, command_line: str) -> None:
    console.print(f"Executing: {escape(command_line)}")
    console.print("-" * RULE_WIDTH)


def print_execution_footer(console: Console, err_console: Console, result: ExecutionResult) -> None:
    console.print("-" * RULE_WIDTH)
    if result.ok:
        console.print(f"[green]{CHECK}[/green] Success")
    else:
        err_console.print(f"[red]{CROSS}[/red] Failed with exit code {result.returncode}")


def print_version(console: Console, info: VersionInfo) -> None:
    console.print(f"{info.program} version {info.version}")
    console.print(f"Config: {escape(str(info.config_path))}")
    console.print(f"Programs: {info.count}")
