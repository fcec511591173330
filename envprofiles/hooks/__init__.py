"""Lifecycle hooks around profile actions.

Host applications register callbacks for ``(action, phase)`` pairs:

- Actions: create, edit, delete, load, select
- Phases: pre, post

Callbacks receive a HookEvent; return values are ignored. Shell
commands can also be attached through the settings file.
"""

from .external import CommandHook
from .external import register_command_hooks
from .models import HookAction
from .models import HookCallback
from .models import HookEvent
from .models import HookPhase
from .registry import HookRegistry

__all__ = [
    "CommandHook",
    "HookAction",
    "HookCallback",
    "HookEvent",
    "HookPhase",
    "HookRegistry",
    "register_command_hooks",
]
