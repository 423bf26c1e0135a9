"""Tests for the terminal prompter with scripted answers."""

from __future__ import annotations

import io
from collections.abc import Callable

import pytest
from rich.console import Console
from rich.prompt import PromptBase

from vercel_cli.prompts import Choice, RichPrompter, Separator


@pytest.fixture
def answer_with(monkeypatch: pytest.MonkeyPatch) -> Callable[..., list[str]]:
    """Feed the given answers to every rich prompt in order."""

    def _install(*answers: str) -> list[str]:
        remaining = list(answers)
        asked: list[str] = []

        def fake_get_input(cls, console, prompt, password, stream=None) -> str:
            asked.append(str(prompt))
            return remaining.pop(0)

        monkeypatch.setattr(PromptBase, "get_input", classmethod(fake_get_input))
        return asked

    return _install


def _prompter() -> tuple[RichPrompter, io.StringIO]:
    output = io.StringIO()
    return RichPrompter(Console(file=output, width=120)), output


def _choices() -> list[Choice | Separator]:
    return [
        Separator("----- Existing Projects -----"),
        Choice("acme/web", "web", checked=True),
        Choice("acme/docs", "docs", checked=True),
        Separator("----- New Projects to be created -----"),
        Choice("acme/api (Next.js)", "api"),
    ]


def test_checkbox_empty_answer_keeps_checked_entries(answer_with) -> None:
    answer_with("")
    prompter, output = _prompter()
    assert prompter.checkbox("Which?", _choices()) == ["web", "docs"]
    assert "1. [x] acme/web" in output.getvalue()
    assert "3. [ ] acme/api (Next.js)" in output.getvalue()


def test_checkbox_none_deselects_everything(answer_with) -> None:
    answer_with("none")
    prompter, _ = _prompter()
    assert prompter.checkbox("Which?", [Choice("a/x", "x", checked=True)]) == []


def test_checkbox_picks_numbers_in_answer_order(answer_with) -> None:
    answer_with("3, 1, 3")
    prompter, _ = _prompter()
    assert prompter.checkbox("Which?", _choices()) == ["api", "web"]


def test_checkbox_reasks_after_invalid_answer(answer_with) -> None:
    asked = answer_with("7", "abc", "2")
    prompter, output = _prompter()
    assert prompter.checkbox("Which?", _choices()) == ["docs"]
    assert len(asked) == 3
    assert output.getvalue().count("Enter numbers between 1 and 3.") == 2


def test_checkbox_without_checked_entries_defaults_to_none(answer_with) -> None:
    answer_with("")
    prompter, _ = _prompter()
    assert prompter.checkbox("Which?", [Choice("a/x", "x"), Choice("a/y", "y")]) == []


def test_checkbox_without_selectable_entries_does_not_ask(answer_with) -> None:
    asked = answer_with()
    prompter, _ = _prompter()
    assert prompter.checkbox("Which?", [Separator("nothing here")]) == []
    assert asked == []


def test_confirm_and_select(answer_with) -> None:
    answer_with("n", "", "upstream")
    prompter, _ = _prompter()
    assert prompter.confirm("Link?", default=True) is False
    assert prompter.select("Remote?", ["origin", "upstream"], default="origin") == "origin"
    assert prompter.select("Remote?", ["origin", "upstream"], default="origin") == "upstream"
