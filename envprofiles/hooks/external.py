"""External command hooks.

Lets the settings file attach shell commands to profile actions.

Environment variables set for the command:
- ENVPROFILES_ACTION: Action name (create, edit, delete, load, select)
- ENVPROFILES_PHASE: pre or post
- PROFILE: Profile name (when known)
- ENVPROFILES_PROFILE_PATH: Profile file path (when known)
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .models import HookEvent
from .registry import HookRegistry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class CommandHook:
    """Hook callback that runs an external command.

    A non-zero exit, a timeout or a missing executable is logged; the
    action being bracketed carries on regardless.
    """

    def __init__(self, command: str, working_dir: Path | None = None, timeout: float = DEFAULT_TIMEOUT):
        if not command.strip():
            raise ValueError("Command hook requires a command")
        self.command = command
        self.working_dir = working_dir
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"CommandHook({self.command!r})"

    def __call__(self, event: HookEvent) -> int | None:
        """Run the command for ``event``.

        Returns:
            Exit code, or None if the command could not be run
        """
        cmd = shlex.split(self.command)
        env = os.environ.copy()
        env.update(event.to_env())

        try:
            proc = subprocess.run(
                cmd,
                cwd=str(self.working_dir) if self.working_dir else None,
                env=env,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError:
            logger.warning(f"Hook {event.key}: command not found: {cmd[0]}")
            return None
        except subprocess.TimeoutExpired:
            logger.warning(f"Hook {event.key}: command timed out after {self.timeout}s")
            return None

        if proc.stderr:
            logger.debug(f"Hook {event.key} stderr: {proc.stderr.strip()}")
        if proc.returncode != 0:
            logger.warning(f"Hook {event.key}: '{self.command}' exited with {proc.returncode}")

        return proc.returncode


def register_command_hooks(
    registry: HookRegistry,
    hooks_settings: Mapping[str, Any] | None,
    working_dir: Path | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> int:
    """Register command hooks from the ``hooks`` section of the settings file.

    Settings format:
    ```yaml
    hooks:
      create:
        post: git -C ~/.myapp add profiles
      load:
        pre:
          - ./check-vpn.sh
          - notify-send "loading"
    ```

    Args:
        registry: Registry to populate
        hooks_settings: Mapping of action -> phase -> command or list of commands
        working_dir: Working directory for the commands
        timeout: Per-command timeout in seconds

    Returns:
        Number of hooks registered
    """
    count = 0
    for action, phases in (hooks_settings or {}).items():
        if not isinstance(phases, Mapping):
            logger.warning(f"Invalid hook configuration for '{action}': expected a mapping of phases")
            continue
        for phase, commands in phases.items():
            if isinstance(commands, str):
                commands = [commands]
            for command in commands or []:
                try:
                    registry.register(action, phase, CommandHook(str(command), working_dir, timeout))
                    count += 1
                except ValueError as e:
                    logger.warning(f"Invalid hook configuration for '{action}_{phase}': {e}")
    return count
