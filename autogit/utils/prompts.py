"""Interactive prompts rendered with rich.

`Prompter` is the only place that reads from the terminal. Steps receive it
as a parameter so tests can swap in a scripted replacement.
"""

import re
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from autogit.utils.console import console as default_console

_ALL_TOKENS = {"a", "all", "*"}


class SelectionError(ValueError):
    """Raised when a checkbox answer cannot be parsed."""


def parse_selection(raw: str, count: int) -> list[int]:
    """Parse a checkbox answer into zero-based indices.

    Accepts 1-based numbers and ranges separated by commas or spaces
    (`1, 3 5-7`), or `a`/`all`/`*` for every choice. An empty answer selects
    nothing. Indices come back sorted so the selection keeps choice order.

    Raises:
        SelectionError: On an unknown token or an out-of-range number
    """
    raw = raw.strip().lower()
    if not raw:
        return []
    if raw in _ALL_TOKENS:
        return list(range(count))

    selected: set[int] = set()
    for token in re.split(r"[,\s]+", raw):
        if not token:
            continue
        match = re.fullmatch(r"(\d+)(?:-(\d+))?", token)
        if not match:
            raise SelectionError(f"Not a number or range: {token!r}")
        start = int(match.group(1))
        end = int(match.group(2) or start)
        if start > end:
            start, end = end, start
        if start < 1 or end > count:
            raise SelectionError(f"Choose numbers between 1 and {count}")
        selected.update(range(start - 1, end))
    return sorted(selected)


class Prompter:
    """Confirm, single-choice, multi-choice and text prompts."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def confirm(self, message: str, default: bool = True) -> bool:
        return Confirm.ask(message, default=default, console=self.console)

    def text(self, message: str, default: str | None = None) -> str:
        answer = Prompt.ask(message, default=default, console=self.console)
        return (answer or "").strip()

    def select(self, message: str, choices: Sequence[str], default: str | None = None) -> str:
        """Single choice from a numbered list."""
        self._print_choices(message, choices)
        default_index = str(choices.index(default) + 1) if default in choices else "1"
        answer = Prompt.ask(
            "Choice",
            choices=[str(i) for i in range(1, len(choices) + 1)],
            default=default_index,
            show_choices=False,
            console=self.console,
        )
        return choices[int(answer) - 1]

    def checkbox(self, message: str, choices: Sequence[str]) -> list[str]:
        """Multi choice from a numbered list; re-asks until the answer parses."""
        if not choices:
            return []
        self._print_choices(message, choices)
        while True:
            raw = Prompt.ask(
                "Numbers (e.g. 1,3 or 2-4), 'a' for all, Enter for none",
                default="",
                show_default=False,
                console=self.console,
            )
            try:
                indices = parse_selection(raw, len(choices))
            except SelectionError as e:
                self.console.print(f"[red]{escape(str(e))}[/]")
                continue
            return [choices[i] for i in indices]

    def _print_choices(self, message: str, choices: Sequence[str]) -> None:
        self.console.print(f"[bold cyan]?[/] [bold]{escape(message)}[/]")
        for number, choice in enumerate(choices, 1):
            self.console.print(f"  [cyan]{number:>2})[/] {escape(choice)}")
