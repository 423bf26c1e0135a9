"""Resumable consumer for the deployment events feed.

Each connection attempt reads newline-delimited JSON records on a worker
thread while the calling thread waits on a one-shot finish gate. In deploy
mode a timer polls the deployment status as a second completion signal, so
the stream end, the record limit, a ``build-complete`` record, a ``READY``
status and a poll failure can all race to finish the same attempt; only the
first of them has any effect.
"""

from __future__ import annotations

import json
import threading
import time
from collections.abc import Callable, Iterator
from typing import Any, Protocol
from urllib.parse import quote

import httpx
from rich.console import Console

from vercel_cli.errors import EventStreamError, PollError, StreamDecodeError
from vercel_cli.events.models import (
    BUILD_COMPLETE,
    DEPLOY_MODE,
    READY_STATE,
    ConsumeOptions,
    PollState,
    RetryState,
    StreamEvent,
)
from vercel_cli.events.output import TerminalEraser
from vercel_cli.logging_utils import get_logger

LOGGER = get_logger()

MAX_RETRIES = 4
POLL_INTERVAL_SECONDS = 5.0


class EventsClient(Protocol):
    """API operations the consumer depends on."""

    def stream(self, path: str, *, params: dict[str, str] | None = None) -> Any: ...

    def fetch(self, path: str) -> dict[str, Any]: ...


class StreamResponse(Protocol):
    """Subset of ``httpx.Response`` used while streaming."""

    status_code: int

    @property
    def is_success(self) -> bool: ...

    def iter_lines(self) -> Iterator[str]: ...


class _OpenOnce:
    """Invoke the caller's first-open hook at most once."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._lock = threading.Lock()
        self._called = False

    def __call__(self) -> None:
        with self._lock:
            if self._called:
                return
            self._called = True
        self._callback()


class EventStreamConsumer:
    """Print deployment events in order, reconnecting on transient failures."""

    def __init__(
        self,
        client: EventsClient,
        *,
        console: Console | None = None,
        eraser: Callable[[int], None] | None = None,
        max_retries: int = MAX_RETRIES,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        base_delay_seconds: float = 1.0,
        max_delay_seconds: float = 8.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must not be negative.")
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive.")
        self.client = client
        self.console = console or Console()
        self.eraser = eraser or TerminalEraser(self.console)
        self.max_retries = max_retries
        self.poll_interval = poll_interval
        self.base_delay_seconds = base_delay_seconds
        self.max_delay_seconds = max_delay_seconds
        self._sleep = sleep

    def consume(self, feed_locator: str, options: ConsumeOptions) -> None:
        """Consume the feed of one deployment until it completes.

        Raises ``EventStreamError`` right away for 4xx answers. Server errors,
        dropped connections and undecodable records are retried up to
        ``max_retries`` times; the last error propagates once the budget is
        spent.
        """
        if options.limit is not None and options.limit <= 0:
            raise ValueError("limit must be greater than zero.")
        deployment = quote(feed_locator, safe="")
        events_path = f"/v1/now/deployments/{deployment}/events"
        poll_path = f"/v3/now/deployments/{deployment}"
        state = RetryState()
        opener = _OpenOnce(options.on_first_open)
        LOGGER.debug(
            "Consuming deployment events",
            extra={"deployment": feed_locator, "mode": options.mode, "limit": options.limit},
        )

        while True:
            if state.attempts_made:
                LOGGER.debug("Retrying events", extra={"attempt": state.attempts_made + 1})
            try:
                self._attempt(events_path, poll_path, options, state, opener)
                return
            except (EventStreamError, StreamDecodeError, httpx.HTTPError) as exc:
                if isinstance(exc, EventStreamError) and not exc.retryable:
                    raise
                if state.attempts_made >= self.max_retries:
                    LOGGER.warning(
                        "Giving up on deployment events after %s retries: %s",
                        state.attempts_made,
                        exc,
                    )
                    raise
                state.attempts_made += 1
                self._on_retry(exc, state, options)

    def _attempt(
        self,
        events_path: str,
        poll_path: str,
        options: ConsumeOptions,
        state: RetryState,
        opener: _OpenOnce,
    ) -> None:
        """Run one connection attempt to completion."""
        with self.client.stream(events_path, params=options.query.to_params()) as response:
            if not response.is_success:
                opener()
                raise EventStreamError(response.status_code)
            opener()
            session = _StreamSession(
                consumer=self,
                options=options,
                state=state,
                opener=opener,
                poll_path=poll_path,
            )
            session.run(response)

    def _on_retry(self, error: Exception, state: RetryState, options: ConsumeOptions) -> None:
        """Clear partial output of the failed attempt and back off."""
        if not options.quiet:
            self.eraser(state.reset_lines())
        LOGGER.warning(
            "Deployment events attempt failed (retry %s/%s): %s",
            state.attempts_made,
            self.max_retries,
            error,
        )
        delay = min(
            self.base_delay_seconds * (2 ** (state.attempts_made - 1)),
            self.max_delay_seconds,
        )
        if delay > 0:
            self._sleep(delay)


class _StreamSession:
    """One open connection plus its optional status poller."""

    def __init__(
        self,
        *,
        consumer: EventStreamConsumer,
        options: ConsumeOptions,
        state: RetryState,
        opener: _OpenOnce,
        poll_path: str,
    ) -> None:
        self._consumer = consumer
        self._options = options
        self._state = state
        self._opener = opener
        self._poll_path = poll_path
        self._poll_state = PollState()
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._finished = False
        self._error: BaseException | None = None
        self._timer: threading.Timer | None = None

    def run(self, response: StreamResponse) -> None:
        """Block until the gate closes, then re-raise the finishing error."""
        if self._options.mode == DEPLOY_MODE:
            self._schedule_poll()
        reader = threading.Thread(
            target=self._read,
            args=(response,),
            name="vc-events-reader",
            daemon=True,
        )
        reader.start()
        self._done.wait()
        if self._error is not None:
            raise self._error

    def finish(self, error: BaseException | None = None) -> None:
        """Close the gate; every call after the first is ignored."""
        with self._lock:
            if self._finished:
                return
            self._finished = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        try:
            self._opener()
            if self._options.mode == DEPLOY_MODE and error is None:
                self._consumer.console.print("[cyan]Success![/cyan] Build complete")
        finally:
            self._error = error
            self._done.set()

    def _read(self, response: StreamResponse) -> None:
        """Read and dispatch records until the stream ends or the gate closes."""
        try:
            for line in response.iter_lines():
                if self._finished:
                    return
                if not line.strip():
                    continue
                self._dispatch(_decode_record(line))
                if self._finished:
                    return
        except Exception as exc:  # noqa: BLE001
            self._fail(exc)
            return
        self.finish()

    def _dispatch(self, record: dict[str, Any]) -> None:
        """Forward one record and close the gate on completion or the limit."""
        self._state.records_seen += 1
        event = StreamEvent.from_record(record)
        if event.kind == BUILD_COMPLETE:
            if self._options.mode == DEPLOY_MODE:
                self.finish()
                return
        else:
            self._state.lines_emitted += self._options.on_event(event)
        if self._options.limit is not None and self._state.records_seen >= self._options.limit:
            self.finish()

    def _fail(self, error: Exception) -> None:
        """Report a mid-stream failure and hand it to the retry loop."""
        if self._finished:
            LOGGER.debug("Ignoring stream error after finish: %s", error)
            return
        self._state.lines_emitted += 1
        self._opener()
        LOGGER.warning("Deployment event stream error: %s", error)
        if not self._options.quiet:
            self._consumer.console.print(
                f"Deployment event stream error: {error}", markup=False, highlight=False
            )
        self.finish(error)

    def _schedule_poll(self) -> None:
        """Arm the status poll timer unless the session already finished."""
        interval = self._consumer.poll_interval
        with self._lock:
            if self._finished:
                return
            self._poll_state.next_poll_at = time.monotonic() + interval
            self._timer = threading.Timer(interval, self._poll)
            self._timer.daemon = True
            self._timer.start()

    def _poll(self) -> None:
        """Fetch the deployment status; READY finishes, a failure is fatal."""
        try:
            payload = self._consumer.client.fetch(self._poll_path)
        except Exception as exc:  # noqa: BLE001
            error = PollError(f"Deployment status poll failed: {exc}")
            error.__cause__ = exc
            self.finish(error)
            return
        ready_state = payload.get("readyState") or payload.get("state")
        self._poll_state.last_state = ready_state
        self._poll_state.next_poll_at = None
        LOGGER.debug("Polled deployment state", extra={"state": ready_state})
        if ready_state == READY_STATE:
            self.finish()
            return
        self._schedule_poll()


def _decode_record(line: str) -> dict[str, Any]:
    """Decode one JSON line of the feed."""
    try:
        record = json.loads(line)
    except ValueError as exc:
        raise StreamDecodeError(f"Invalid event record: {line[:120]!r}") from exc
    if not isinstance(record, dict):
        raise StreamDecodeError(f"Expected a JSON object, got: {line[:120]!r}")
    return record
