"""Deployment event feed consumption."""

from __future__ import annotations

from vercel_cli.events.consumer import MAX_RETRIES, POLL_INTERVAL_SECONDS, EventStreamConsumer
from vercel_cli.events.models import (
    BUILD_COMPLETE,
    DEPLOY_MODE,
    LOGS_MODE,
    READY_STATE,
    ConsumeOptions,
    EventQuery,
    PollState,
    RetryState,
    StreamEvent,
)
from vercel_cli.events.output import EventPrinter, TerminalEraser, erase_lines

__all__ = [
    "BUILD_COMPLETE",
    "DEPLOY_MODE",
    "LOGS_MODE",
    "MAX_RETRIES",
    "POLL_INTERVAL_SECONDS",
    "READY_STATE",
    "ConsumeOptions",
    "EventPrinter",
    "EventQuery",
    "EventStreamConsumer",
    "PollState",
    "RetryState",
    "StreamEvent",
    "TerminalEraser",
    "erase_lines",
]
