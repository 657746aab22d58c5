"""Terminal output helpers built on rich."""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.status import Status

console = Console(highlight=False)


def print_header(title: str) -> None:
    """Print a formatted header."""
    console.print()
    console.rule(f"[bold]{escape(title)}")


def print_stats(label: str, value: Any) -> None:
    """Print a formatted stat line."""
    console.print(f"  • {escape(label)}: {escape(str(value))}")


def info(message: str) -> None:
    console.print(f"[cyan]{escape(message)}[/]")


def success(message: str) -> None:
    console.print(f"[green]{escape(message)}[/]")


def warning(message: str) -> None:
    console.print(f"[yellow]{escape(message)}[/]")


def error(message: str) -> None:
    console.print(f"[red]{escape(message)}[/]")


class Spinner:
    """Indeterminate progress indicator that resolves to success or failure."""

    def __init__(self, text: str, spinner: str = "dots", style: str = "white") -> None:
        self._status: Status = console.status(
            escape(text), spinner=spinner, spinner_style=style
        )

    def start(self) -> "Spinner":
        self._status.start()
        return self

    def stop(self) -> None:
        self._status.stop()

    def succeed(self, message: str) -> None:
        self._status.stop()
        console.print(f"[green]✔[/] {escape(message)}")

    def fail(self, message: str) -> None:
        self._status.stop()
        console.print(f"[red]✖ {escape(message)}[/]")
