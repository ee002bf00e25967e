"""Interactive prompts behind a small capability interface.

``ProgramManager`` never reads stdin itself; it asks a ``Prompter``.  The
CLI passes a ``ConsolePrompter``; tests and scripts pass a
``ScriptedPrompter`` with canned answers.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Protocol

from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.text import Text


class Prompter(Protocol):
    """What the store needs from the user."""

    def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question; True means proceed."""
        ...

    def ask(self, prompt: str) -> str:
        """Read one line of free text ("" when the user just presses Enter)."""
        ...


class ConsolePrompter:
    """Prompter that blocks on the terminal via rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def confirm(self, prompt: str) -> bool:
        try:
            return Confirm.ask(Text(prompt), console=self.console, default=False)
        except EOFError:
            return False

    def ask(self, prompt: str) -> str:
        try:
            return Prompt.ask(
                Text(prompt), console=self.console, default="", show_default=False
            )
        except EOFError:
            return ""


class ScriptedPrompter:
    """Prompter that replays fixed answers and records what was asked.

    Confirmations beyond the scripted ones fall back to *default*; text
    questions beyond the scripted ones get ``""`` (keep current value).
    """

    def __init__(
        self,
        confirms: Iterable[bool] = (),
        answers: Iterable[str] = (),
        default: bool = False,
    ) -> None:
        self._confirms = deque(confirms)
        self._answers = deque(answers)
        self.default = default
        self.asked: list[str] = []

    def confirm(self, prompt: str) -> bool:
        self.asked.append(prompt)
        if self._confirms:
            return self._confirms.popleft()
        return self.default

    def ask(self, prompt: str) -> str:
        self.asked.append(prompt)
        if self._answers:
            return self._answers.popleft()
        return ""
