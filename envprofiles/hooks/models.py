"""Hook system data models.

Defines the core types for lifecycle hooks:
- HookAction: Profile actions that can be bracketed by hooks
- HookPhase: Before or after the action
- HookEvent: What a callback receives
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable


class HookAction(str, Enum):
    """Profile actions that run hooks."""

    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    LOAD = "load"
    SELECT = "select"


class HookPhase(str, Enum):
    """When a hook runs relative to its action."""

    PRE = "pre"
    POST = "post"


@dataclass(frozen=True)
class HookEvent:
    """Context passed to a hook callback.

    Attributes:
        action: Action being run
        phase: Pre or post
        profile: Profile name, if known at this point
        path: Profile file path, if known at this point
    """

    action: HookAction
    phase: HookPhase
    profile: str | None = None
    path: Path | None = None

    @property
    def key(self) -> str:
        """Conventional name of the hook, e.g. ``create_pre``."""
        return f"{self.action.value}_{self.phase.value}"

    def to_env(self) -> dict[str, str]:
        """Environment variables describing this event."""
        env = {
            "ENVPROFILES_ACTION": self.action.value,
            "ENVPROFILES_PHASE": self.phase.value,
        }
        if self.profile:
            env["PROFILE"] = self.profile
        if self.path is not None:
            env["ENVPROFILES_PROFILE_PATH"] = str(self.path)
        return env


# Return values are ignored: hooks observe actions, they cannot veto them.
HookCallback = Callable[[HookEvent], object]
