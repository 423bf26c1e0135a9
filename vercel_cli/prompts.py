"""Interactive prompt abstraction with a rich-based terminal implementation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from rich.console import Console
from rich.prompt import Confirm, Prompt

NONE_ANSWER = "none"


@dataclass(frozen=True)
class Choice:
    """One entry of a multi-select prompt."""

    label: str
    value: Any
    checked: bool = False


@dataclass(frozen=True)
class Separator:
    """Non-selectable heading between groups of choices."""

    label: str


class Prompter(Protocol):
    """Minimal prompt protocol used by interactive flows."""

    def confirm(self, message: str, *, default: bool) -> bool: ...

    def select(self, message: str, choices: list[str], *, default: str | None = None) -> str: ...

    def checkbox(self, message: str, choices: list[Choice | Separator]) -> list[Any]: ...


class RichPrompter:
    """Prompter reading answers from the terminal through ``rich.prompt``."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def confirm(self, message: str, *, default: bool) -> bool:
        """Ask a yes/no question."""
        return Confirm.ask(message, default=default, console=self.console)

    def select(self, message: str, choices: list[str], *, default: str | None = None) -> str:
        """Ask for exactly one of the given choices."""
        if default is None:
            return Prompt.ask(message, choices=choices, console=self.console)
        return Prompt.ask(message, choices=choices, default=default, console=self.console)

    def checkbox(self, message: str, choices: list[Choice | Separator]) -> list[Any]:
        """Ask for any subset of choices by number.

        An empty answer keeps the pre-checked entries and ``none`` selects nothing.
        """
        selectable: list[Choice] = []
        self.console.print(message)
        for entry in choices:
            if isinstance(entry, Separator):
                self.console.print(f"  [dim]{entry.label}[/dim]")
                continue
            selectable.append(entry)
            marker = "x" if entry.checked else " "
            self.console.print(f"  {len(selectable)}. [{marker}] {entry.label}", markup=False)
        if not selectable:
            return []
        default = ",".join(
            str(index) for index, entry in enumerate(selectable, start=1) if entry.checked
        )
        while True:
            answer = Prompt.ask(
                "Numbers to select (comma separated, 'none' for none)",
                default=default,
                show_default=bool(default),
                console=self.console,
            )
            try:
                indexes = _parse_indexes(answer, len(selectable))
            except ValueError as exc:
                self.console.print(f"[red]{exc}[/red]")
                continue
            return [selectable[index - 1].value for index in indexes]


def _parse_indexes(answer: str, upper: int) -> list[int]:
    """Parse a comma separated 1-based index list, keeping first occurrence order."""
    indexes: list[int] = []
    if answer.strip().lower() == NONE_ANSWER:
        return indexes
    for part in answer.split(","):
        cleaned = part.strip()
        if not cleaned:
            continue
        if not cleaned.isdigit() or not 1 <= int(cleaned) <= upper:
            raise ValueError(f"Enter numbers between 1 and {upper}.")
        if int(cleaned) not in indexes:
            indexes.append(int(cleaned))
    return indexes
