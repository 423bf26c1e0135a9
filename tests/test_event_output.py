"""Tests for event rendering and line erasing."""

from __future__ import annotations

import io

from rich.console import Console

from vercel_cli.events import EventPrinter, StreamEvent, TerminalEraser, erase_lines


def test_erase_lines_sequence() -> None:
    assert str(erase_lines(0)) == ""
    assert str(erase_lines(1)) == "\x1b[2K\x1b[1G"
    assert str(erase_lines(3)) == "\x1b[2K\x1b[1A\x1b[2K\x1b[1A\x1b[2K\x1b[1G"


def test_terminal_eraser_ignores_non_terminals() -> None:
    output = io.StringIO()
    eraser = TerminalEraser(Console(file=output))
    eraser(3)
    assert output.getvalue() == ""


def test_terminal_eraser_writes_control_codes() -> None:
    output = io.StringIO()
    eraser = TerminalEraser(Console(file=output, force_terminal=True))
    eraser(2)
    eraser(0)
    assert output.getvalue() == "\x1b[2K\x1b[1A\x1b[2K\x1b[1G"


def test_event_printer_counts_lines() -> None:
    output = io.StringIO()
    printer = EventPrinter(Console(file=output, width=120))
    event = StreamEvent.from_record(
        {"type": "stdout", "created": 1700000000000, "text": "first\nsecond\n"}
    )
    assert printer(event) == 2
    lines = output.getvalue().splitlines()
    assert lines == ["2023-11-14T22:13:20.000Z  first", "2023-11-14T22:13:20.000Z  second"]


def test_event_printer_without_timestamps_or_text() -> None:
    output = io.StringIO()
    printer = EventPrinter(Console(file=output, width=120), show_timestamps=False)
    assert printer(StreamEvent.from_record({"type": "command", "payload": {"text": "npm i"}})) == 1
    assert printer(StreamEvent.from_record({"type": "delimiter"})) == 0
    assert output.getvalue() == "npm i\n"


def test_stream_event_kind_prefers_event_field() -> None:
    event = StreamEvent.from_record({"event": "build-complete", "type": "other"})
    assert event.kind == "build-complete"
    assert event.created is None
