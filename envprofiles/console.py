"""Shared Rich console instances for CLI output.

``console`` writes to stdout and is reserved for command results, so that
``eval "$(envprofiles load NAME)"`` only ever sees shell code.
Messages and prompts go to ``err_console``.
"""

from rich.console import Console

console = Console()
err_console = Console(stderr=True)

__all__ = ["console", "err_console"]
