"""Data model for the deployment events feed."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

BUILD_COMPLETE = "build-complete"
DEPLOY_MODE = "deploy"
LOGS_MODE = "logs"
READY_STATE = "READY"


@dataclass(frozen=True)
class StreamEvent:
    """One decoded record of the events feed."""

    kind: str
    payload: dict[str, Any]

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> StreamEvent:
        """Build an event from a decoded JSON line."""
        kind = record.get("event", record.get("type", ""))
        return cls(kind=str(kind or ""), payload=record)

    @property
    def text(self) -> str | None:
        """Return the printable text of the record, if any."""
        value = self.payload.get("text")
        if value is None:
            nested = self.payload.get("payload")
            if isinstance(nested, dict):
                value = nested.get("text")
        return None if value is None else str(value)

    @property
    def created(self) -> int | None:
        """Return the creation timestamp in epoch milliseconds."""
        value = self.payload.get("created", self.payload.get("date"))
        if isinstance(value, bool) or not isinstance(value, int | float):
            return None
        return int(value)


@dataclass
class RetryState:
    """Bookkeeping shared by all connection attempts of one consume call."""

    attempts_made: int = 0
    lines_emitted: int = 0
    # Counts across attempts, so records replayed after a reconnect also use up the limit.
    records_seen: int = 0

    def reset_lines(self) -> int:
        """Return how many terminal lines to erase and start a new count.

        One extra line is erased to account for the line in progress.
        """
        count = self.lines_emitted + 1 if self.lines_emitted else 0
        self.lines_emitted = 0
        return count


@dataclass
class PollState:
    """Deployment status side channel used in deploy mode."""

    last_state: str | None = None
    next_poll_at: float | None = None


@dataclass(frozen=True)
class EventQuery:
    """Filters sent to the events endpoint."""

    query: str | None = None
    types: tuple[str, ...] = ()
    since: int | None = None
    until: int | None = None
    instance_id: str | None = None
    follow: bool = False
    format: str = "lines"

    def to_params(self) -> dict[str, str]:
        """Render the query string; empty filters are sent as empty values."""
        return {
            "query": self.query or "",
            "types": ",".join(self.types),
            "since": "" if self.since is None else str(self.since),
            "until": "" if self.until is None else str(self.until),
            "instanceId": self.instance_id or "",
            "follow": "1" if self.follow else "",
            "format": self.format,
        }


def _no_open() -> None:
    return None


@dataclass(frozen=True)
class ConsumeOptions:
    """Caller supplied behavior for one consume call."""

    on_event: Callable[[StreamEvent], int]
    mode: str = LOGS_MODE
    on_first_open: Callable[[], None] = _no_open
    limit: int | None = None
    quiet: bool = False
    query: EventQuery = field(default_factory=EventQuery)
