"""Message emission for user-facing notices, warnings and errors."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console

from ..console import err_console
from ..utils.error_format import escape_markup


class Messenger(Protocol):
    """Capability to show messages to the user."""

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleMessenger:
    """Messenger printing to a Rich console (stderr by default)."""

    def __init__(self, console: Console | None = None, quiet: bool = False):
        self.console = console or err_console
        self.quiet = quiet

    def info(self, message: str) -> None:
        if not self.quiet:
            self.console.print(escape_markup(message))

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]Warning:[/yellow] {escape_markup(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]Error:[/red] {escape_markup(message)}")


class RecordingMessenger:
    """Messenger that keeps messages in memory. Used by embedders and tests."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def of_level(self, level: str) -> list[str]:
        return [message for lvl, message in self.messages if lvl == level]
