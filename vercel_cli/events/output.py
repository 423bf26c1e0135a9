"""Terminal rendering for deployment events."""

from __future__ import annotations

from datetime import UTC, datetime

from rich.console import Console
from rich.control import Control, ControlType
from rich.text import Text

from vercel_cli.events.models import StreamEvent


def erase_lines(count: int) -> Control:
    """Return a control sequence erasing ``count`` lines above the cursor."""
    codes: list[ControlType | tuple[ControlType, int]] = []
    for index in range(count):
        codes.append((ControlType.ERASE_IN_LINE, 2))
        if index < count - 1:
            codes.append((ControlType.CURSOR_UP, 1))
    if count:
        codes.append((ControlType.CURSOR_MOVE_TO_COLUMN, 0))
    return Control(*codes)


class TerminalEraser:
    """Erase previously printed event lines before a reconnect."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def __call__(self, count: int) -> None:
        if count <= 0 or not self.console.is_terminal:
            return
        self.console.control(erase_lines(count))


class EventPrinter:
    """Default event sink printing one line per line of event text."""

    def __init__(self, console: Console, *, show_timestamps: bool = True) -> None:
        self.console = console
        self.show_timestamps = show_timestamps

    def __call__(self, event: StreamEvent) -> int:
        """Print the event and return the number of printed lines."""
        text = event.text
        if not text:
            return 0
        lines = text.rstrip("\n").splitlines() or [""]
        prefix = self._prefix(event)
        for line in lines:
            rendered = Text()
            if prefix:
                rendered.append(prefix, style="dim")
            rendered.append(line)
            self.console.print(rendered, highlight=False, soft_wrap=True)
        return len(lines)

    def _prefix(self, event: StreamEvent) -> str:
        if not self.show_timestamps or event.created is None:
            return ""
        stamp = datetime.fromtimestamp(event.created / 1000, tz=UTC)
        return f"{stamp.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3]}Z  "
