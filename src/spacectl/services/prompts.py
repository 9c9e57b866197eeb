"""Prompt providers — the injected source of interactive answers.

Workflows never call click directly. They ask a :class:`PromptProvider`,
which is :class:`ClickPrompts` on a terminal and
:class:`NonInteractivePrompts` under ``--no-interact``, ``--json``, or a
non-TTY stdin. Tests pass canned answers instead.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol, TypeVar

import click

_T = TypeVar("_T")


class PromptProvider(Protocol):
    """Source of answers to yes/no, free-text, and choice questions.

    ``None`` means "no answer available"; callers treat it as the
    conservative default.
    """

    def notify(self, message: str) -> bool:
        """Show *message* ahead of a question. True when the user saw it."""
        ...

    def confirm(self, question: str, *, default: bool = False) -> bool | None: ...

    def text(self, question: str) -> str | None: ...

    def choose(
        self, question: str, choices: Sequence[_T], *, display: Callable[[_T], str] = str
    ) -> _T | None: ...


class NonInteractivePrompts:
    """Answers nothing. Every question yields ``None``."""

    def notify(self, message: str) -> bool:
        return False

    def confirm(self, question: str, *, default: bool = False) -> bool | None:
        return None

    def text(self, question: str) -> str | None:
        return None

    def choose(
        self, question: str, choices: Sequence[_T], *, display: Callable[[_T], str] = str
    ) -> _T | None:
        return None


class ClickPrompts:
    """Ask on the terminal through click (prompts go to stderr)."""

    def notify(self, message: str) -> bool:
        click.echo(f"WARNING: {message}", err=True)
        return True

    def confirm(self, question: str, *, default: bool = False) -> bool | None:
        return click.confirm(question, default=default, err=True)

    def text(self, question: str) -> str | None:
        value = click.prompt(question, default="", show_default=False, err=True)
        return value.strip() or None

    def choose(
        self, question: str, choices: Sequence[_T], *, display: Callable[[_T], str] = str
    ) -> _T | None:
        if not choices:
            return None
        for index, choice in enumerate(choices, start=1):
            click.echo(f"{index}: {display(choice)}", err=True)
        picked = click.prompt(question, type=click.IntRange(1, len(choices)), err=True)
        return choices[picked - 1]
