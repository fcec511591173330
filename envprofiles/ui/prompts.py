"""Interactive prompts used by profile actions.

The engine only depends on the Prompter protocol; ConsolePrompter is
the terminal implementation used by the CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import click
from rich.console import Console
from rich.prompt import Confirm
from rich.prompt import Prompt

from ..console import err_console

logger = logging.getLogger(__name__)


class Prompter(Protocol):
    """Interactive capabilities consumed by ProfileManager.

    Every method returns None (or False) when the user gives no answer.
    """

    def ask(self, prompt: str, default: str | None = None) -> str | None: ...

    def choose(self, prompt: str, options: list[str], default: str | None = None) -> str | None: ...

    def confirm(self, prompt: str, default: bool = False) -> bool: ...

    def edit(self, path: Path) -> bool: ...


class ConsolePrompter:
    """Prompter backed by Rich prompts and the user's $EDITOR."""

    def __init__(self, console: Console | None = None, editor: str | None = None):
        self.console = console or err_console
        self.editor = editor

    def ask(self, prompt: str, default: str | None = None) -> str | None:
        try:
            if default is None:
                answer = Prompt.ask(prompt, console=self.console, default="", show_default=False)
            else:
                answer = Prompt.ask(prompt, console=self.console, default=default)
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            return None
        answer = answer.strip()
        return answer or None

    def choose(self, prompt: str, options: list[str], default: str | None = None) -> str | None:
        """Pick one option by number or by name."""
        if not options:
            return None

        self.console.print(f"\n[bold]{prompt}[/bold]")
        for index, option in enumerate(options, start=1):
            marker = " [dim](default)[/dim]" if option == default else ""
            self.console.print(f"  [{index}] {option}{marker}")

        choices = [str(index) for index in range(1, len(options) + 1)] + list(options)
        default_choice = str(options.index(default) + 1) if default in options else None
        try:
            answer = Prompt.ask(
                "Choice",
                console=self.console,
                choices=choices,
                show_choices=False,
                default=default_choice,
            )
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            return None

        if answer is None:
            return None
        if answer.isdigit() and answer not in options:
            return options[int(answer) - 1]
        return answer

    def confirm(self, prompt: str, default: bool = False) -> bool:
        try:
            return Confirm.ask(prompt, console=self.console, default=default)
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            return False

    def edit(self, path: Path) -> bool:
        """Open ``path`` in the editor. Returns False if the editor failed."""
        try:
            click.edit(filename=str(path), editor=self.editor)
        except click.ClickException as e:
            logger.warning(f"Editor failed for {path}: {e.format_message()}")
            return False
        return True
